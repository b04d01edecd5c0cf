import io

import pytest

from ticketsys.cli import CommandError, TicketSystem, main, parse_options

PASSWORD = "password"

SETUP = [
    f"[1] add_user -c root -u alice -p {PASSWORD} -n Alice "
    "-m alice@example.com -g 10",
    f"[2] login -u alice -p {PASSWORD}",
    "[3] add_train -i HAPPY -n 3 -m 10 -s A|B|C -p 10|20 -x 08:00 "
    "-t 60|60 -o 5 -d 06-01|06-30 -y G",
    "[4] release_train -i HAPPY",
]


@pytest.fixture
def system():
    ticket_system = TicketSystem()
    for line in SETUP:
        ticket_system.execute(line)
    return ticket_system


def test_parse_options_pairs_flags():
    assert parse_options(["-u", "alice", "-p", "x"]) == {"u": "alice", "p": "x"}


def test_parse_options_missing_value_is_empty():
    assert parse_options(["-u"]) == {"u": ""}


def test_parse_options_rejects_empty_token():
    with pytest.raises(CommandError):
        parse_options(["", "alice"])


def test_setup_replies_are_stamped():
    ticket_system = TicketSystem()
    replies = [ticket_system.execute(line) for line in SETUP]
    assert replies == ["[1] 0", "[2] 0", "[3] 0", "[4] 0"]


def test_query_profile(system):
    assert (system.execute("[5] query_profile -c alice -u alice")
            == "[5] alice Alice alice@example.com 10")


def test_unknown_command_raises(system):
    with pytest.raises(CommandError):
        system.execute("[5] fly_away -u alice")


def test_unknown_option_raises(system):
    with pytest.raises(CommandError):
        system.execute("[5] login -z alice")


def test_buy_ticket_uses_stamp(system):
    reply = system.execute("[7] buy_ticket -u alice -i HAPPY -d 06-01 -n 2 "
                           "-f A -t C")
    train = system.trains.get("HAPPY")
    price = train.stations[2].price - train.stations[0].price
    assert reply == f"[7] {2 * price}"
    order = system.execute("[8] query_order -u alice").split("\n")
    assert order[0] == "[8] 1"
    assert order[1].startswith("[success] HAPPY A 06-01 08:00 -> C ")


def test_refund_defaults_to_latest(system):
    system.execute("[5] buy_ticket -u alice -i HAPPY -d 06-01 -n 2 -f A -t C")
    assert system.execute("[6] refund_ticket -u alice") == "[6] 0"
    assert system.execute("[7] refund_ticket -u alice") == "[7] -1"


def test_query_ticket_defaults_to_cost(system):
    by_default = system.execute("[5] query_ticket -s A -t C -d 06-01")
    by_cost = system.execute("[5] query_ticket -s A -t C -d 06-01 -p cost")
    assert by_default == by_cost
    assert by_default.split("\n")[1].startswith("HAPPY A 06-01 08:00 -> C ")


def test_run_stops_after_exit():
    ticket_system = TicketSystem()
    output = list(ticket_system.run(SETUP[:2] + ["[3] exit", "[4] login -u x"]))
    assert output == ["[1] 0\n", "[2] 0\n", "[3] bye"]
    assert ticket_system.users.logged_in("alice") is False


def test_main_reads_stdin(monkeypatch, capsys):
    commands = "\n".join(SETUP[:2] + ["[3] logout -u alice", "[4] exit"]) + "\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(commands))
    assert main() == 0
    assert capsys.readouterr().out == "[1] 0\n[2] 0\n[3] 0\n[4] bye"


def test_main_reports_bad_command(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("[1] nonsense\n"))
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "nonsense" in captured.err