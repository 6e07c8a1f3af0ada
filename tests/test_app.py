from digirain import app


def test_main_returns_session_status(monkeypatch):
    runs = []

    class DummySession:
        def run(self) -> int:
            runs.append(True)
            return 0

    monkeypatch.setattr(app, "Session", DummySession)
    assert app.main() == 0
    assert runs == [True]
