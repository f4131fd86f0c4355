from infra import setup_gmail_watch


def test_main_registers_watch_and_reports(monkeypatch, capsys):
    monkeypatch.setattr(setup_gmail_watch, "register_watch", lambda: {"historyId": "777", "expiration": "1700000000000"})

    watch = setup_gmail_watch.main()

    out = capsys.readouterr().out
    assert watch["historyId"] == "777"
    assert "Gmail watch registered" in out
    assert "History ID: 777" in out
