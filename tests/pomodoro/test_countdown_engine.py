import unittest
from typing import Callable, Optional

from pomodoro import CountdownEngine, Mode, Session, SessionEvent


class _RecordingObserver:
    def __init__(
        self,
        *,
        on_tick: Optional[Callable[[Session], None]] = None,
        on_toggle: Optional[Callable[[Session], None]] = None,
    ):
        self.events: list[tuple[str, object]] = []
        self._on_tick = on_tick
        self._on_toggle = on_toggle

    def session_started(self, session):
        self.events.append(("started", session.remaining_seconds))

    def session_ticked(self, session):
        self.events.append(("ticked", session.remaining_seconds))
        if self._on_tick is not None:
            self._on_tick(session)

    def session_pause_toggled(self, session):
        self.events.append(("paused" if session.paused else "resumed", session.remaining_seconds))
        if self._on_toggle is not None:
            self._on_toggle(session)

    def session_stopped(self, session):
        self.events.append(("stopped", session.remaining_seconds))

    def session_completed(self, session):
        self.events.append(("completed", session.remaining_seconds))

    def mode_changed(self, previous, current):
        pass

    def trigger_ignored(self, trigger, reason, mode):
        pass

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]


def _post(session: Session, script: str) -> None:
    """Queue events: `t` tick, `p` pause/resume."""
    for char in script:
        if char == "t":
            session.signals.tick()
        elif char == "p":
            session.signals.pause_resume()


class CountdownEngineTests(unittest.TestCase):
    def test_completes_after_exactly_duration_ticks(self) -> None:
        for duration in (1, 2, 5):
            with self.subTest(duration=duration):
                session = Session(kind=Mode.WORK, duration_seconds=duration)
                _post(session, "t" * (duration + 2))
                observer = _RecordingObserver()

                result = CountdownEngine(observer=observer).run(session)

                self.assertTrue(result.completed)
                self.assertEqual(duration, result.ticks_observed)
                self.assertEqual(0, result.remaining_seconds)
                self.assertEqual(
                    [("ticked", duration - n) for n in range(1, duration + 1)],
                    [event for event in observer.events if event[0] == "ticked"],
                )
                # Ticks beyond the duration are left unconsumed.
                self.assertIs(SessionEvent.TICK, session.signals.wait_next(timeout=0))

    def test_non_positive_duration_completes_without_consuming_events(self) -> None:
        for duration in (0, -5):
            with self.subTest(duration=duration):
                session = Session(kind=Mode.REST, duration_seconds=duration)
                _post(session, "t")

                result = CountdownEngine(observer=_RecordingObserver()).run(session)

                self.assertEqual("completed", result.outcome)
                self.assertEqual(0, result.ticks_observed)
                self.assertIs(SessionEvent.TICK, session.signals.wait_next(timeout=0))

    def test_paused_ticks_extend_completion(self) -> None:
        session = Session(kind=Mode.WORK, duration_seconds=5)
        _post(session, "ttpttpttt")
        observer = _RecordingObserver()

        result = CountdownEngine(observer=observer).run(session)

        self.assertTrue(result.completed)
        self.assertEqual(5 + 2, result.ticks_observed)
        self.assertEqual(
            [
                "started",
                "ticked",
                "ticked",
                "paused",
                "resumed",
                "ticked",
                "ticked",
                "ticked",
                "completed",
            ],
            observer.kinds(),
        )
        self.assertIn(("paused", 3), observer.events)
        self.assertIn(("resumed", 3), observer.events)

    def test_stop_after_three_ticks_reports_stopped(self) -> None:
        def stop_at_seven(session: Session) -> None:
            if session.remaining_seconds == 7:
                session.signals.stop()

        session = Session(kind=Mode.WORK, duration_seconds=10)
        _post(session, "ttttt")
        observer = _RecordingObserver(on_tick=stop_at_seven)

        result = CountdownEngine(observer=observer).run(session)

        self.assertEqual("stopped", result.outcome)
        self.assertEqual(7, result.remaining_seconds)
        self.assertEqual(3, result.ticks_observed)
        self.assertNotIn("completed", observer.kinds())
        self.assertEqual(("stopped", 7), observer.events[-1])

    def test_stop_while_paused_reports_stopped(self) -> None:
        def stop_on_pause(session: Session) -> None:
            if session.paused:
                session.signals.stop()

        session = Session(kind=Mode.REST, duration_seconds=10)
        _post(session, "tpttt")
        observer = _RecordingObserver(on_toggle=stop_on_pause)

        result = CountdownEngine(observer=observer).run(session)

        self.assertEqual("stopped", result.outcome)
        self.assertEqual(9, result.remaining_seconds)
        self.assertEqual(1, result.ticks_observed)

    def test_stop_before_first_tick_keeps_full_duration(self) -> None:
        session = Session(kind=Mode.WORK, duration_seconds=3)
        session.signals.stop()

        result = CountdownEngine(observer=_RecordingObserver()).run(session)

        self.assertEqual("stopped", result.outcome)
        self.assertEqual(3, result.remaining_seconds)
        self.assertEqual(0, result.ticks_observed)

    def test_stop_after_final_tick_does_not_preempt_completion(self) -> None:
        def stop_at_zero(session: Session) -> None:
            if session.remaining_seconds == 0:
                session.signals.stop()

        session = Session(kind=Mode.WORK, duration_seconds=2)
        _post(session, "tt")
        observer = _RecordingObserver(on_tick=stop_at_zero)

        result = CountdownEngine(observer=observer).run(session)

        self.assertEqual("completed", result.outcome)
        self.assertNotIn("stopped", observer.kinds())

    def test_session_rejects_idle_kind(self) -> None:
        with self.assertRaises(ValueError):
            Session(kind=Mode.IDLE, duration_seconds=10)


if __name__ == "__main__":
    unittest.main()
