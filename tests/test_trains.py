import pytest

from ticketsys.timeutil import datify, parse_clock
from ticketsys.trains import TrainHandler, parse_train


def _abc(handler, train_id="T1", start="08:00", sale="06-01|06-30"):
    return handler.add_train(train_id, "3", "100", "A|B|C", "10|20", start,
                             "60|120", "10", sale, "G")


def _direct(handler, train_id, price, start="08:00", travel="60"):
    return handler.add_train(train_id, "2", "50", "A|C", price, start,
                             travel, "_", "06-01|06-30", "D")


@pytest.fixture
def handler():
    return TrainHandler()


def test_parse_train_prices_are_cumulative():
    train = parse_train("T1", "3", "100", "A|B|C", "10|20", "08:00",
                        "60|120", "10", "06-01|06-30", "G")
    assert [s.name for s in train.stations] == ["A", "B", "C"]
    prices = [s.price for s in train.stations]
    assert prices[0] == 0
    assert [b - a for a, b in zip(prices, prices[1:])] == [10, 20]


def test_parse_train_times_follow_travel_and_stopover():
    train = parse_train("T1", "3", "100", "A|B|C", "10|20", "08:00",
                        "60|120", "10", "06-01|06-30", "G")
    a, b, c = train.stations
    assert a.arriving.is_none
    assert c.leaving.is_none
    assert a.leaving == parse_clock("08:00")
    assert b.arriving - a.leaving == 60
    assert b.leaving - b.arriving == 10
    assert c.arriving - b.leaving == 120


def test_parse_train_type_and_seats():
    train = parse_train("T1", "2", "7", "A|C", "5", "23:30", "90", "_",
                        "06-05|06-07", "GD")
    assert train.train_type == "G"
    assert sorted(train.seats) == list(range(datify("06-05"), datify("06-07") + 1))
    assert all(row == [7, 7] for row in train.seats.values())
    assert not train.runs_on(datify("06-04"))
    assert train.runs_on(datify("06-06"))
    assert train.stations[1].arriving.date == 1


def test_station_index_and_min_seats():
    train = parse_train("T1", "3", "100", "A|B|C", "10|20", "08:00",
                        "60|120", "10", "06-01|06-30", "G")
    assert train.station_index("B") == 1
    assert train.station_index("Z") is None
    day = datify("06-03")
    train.seats[day][1] = 5
    assert train.min_seats(day, 0, 2) == 5
    assert train.min_seats(day, 0, 1) == 100


def test_add_train_rejects_duplicate(handler):
    assert _abc(handler) == "0"
    assert _abc(handler) == "-1"
    assert handler.get("T1").train_id == "T1"


def test_delete_train(handler):
    _abc(handler)
    assert handler.delete_train("T1") == "0"
    assert handler.get("T1") is None
    assert handler.delete_train("T1") == "-1"


def test_delete_released_train_fails(handler):
    _abc(handler)
    handler.release_train("T1")
    assert handler.delete_train("T1") == "-1"
    assert handler.get("T1").released


def test_release_train_twice_fails(handler):
    _abc(handler)
    assert handler.release_train("T1") == "0"
    assert handler.release_train("T1") == "-1"
    assert handler.release_train("NOPE") == "-1"


def test_query_train_output(handler):
    _abc(handler)
    assert handler.query_train("T1", "06-02") == (
        "T1 G\n"
        "A xx-xx xx:xx -> 06-02 08:00 0 100\n"
        "B 06-02 09:00 -> 06-02 09:10 10 100\n"
        "C 06-02 11:10 -> xx-xx xx:xx 30 x"
    )


def test_query_train_failures(handler):
    _abc(handler)
    assert handler.query_train("NOPE", "06-02") == "-1"
    assert handler.query_train("T1", "07-01") == "-1"
    assert handler.query_train("T1", "13-01") == "-1"


def test_query_ticket_needs_release(handler):
    _abc(handler)
    assert handler.query_ticket("A", "C", "06-02", "cost") == "0"
    handler.release_train("T1")
    lines = handler.query_ticket("A", "C", "06-02", "cost").splitlines()
    assert lines[0] == "1"
    fields = lines[1].split()
    assert fields[:3] == ["T1", "A", "06-02"]
    assert fields[5] == "C"
    assert fields[-1] == "100"


def test_query_ticket_wrong_direction_and_bad_date(handler):
    _abc(handler)
    handler.release_train("T1")
    assert handler.query_ticket("C", "A", "06-02", "cost") == "0"
    assert handler.query_ticket("A", "C", "13-02", "cost") == "0"
    assert handler.query_ticket("A", "C", "07-15", "cost") == "0"


def test_query_ticket_sorting(handler):
    _abc(handler)
    _direct(handler, "T2", "50")
    handler.release_train("T1")
    handler.release_train("T2")
    by_cost = handler.query_ticket("A", "C", "06-02", "cost").splitlines()[1:]
    by_time = handler.query_ticket("A", "C", "06-02", "time").splitlines()[1:]
    assert [line.split()[0] for line in by_cost] == ["T1", "T2"]
    assert [line.split()[0] for line in by_time] == ["T2", "T1"]


def test_query_ticket_ties_break_on_id(handler):
    _direct(handler, "ZZ", "40")
    _direct(handler, "AA", "40")
    handler.release_train("ZZ")
    handler.release_train("AA")
    lines = handler.query_ticket("A", "C", "06-02", "cost").splitlines()[1:]
    ids = [line.split()[0] for line in lines]
    assert ids == sorted(ids)
    assert len(ids) == 2


def test_query_transfer(handler):
    _abc(handler)
    handler.add_train("T2", "2", "200", "C|D", "50", "12:00", "60", "_",
                      "06-01|06-30", "G")
    handler.release_train("T1")
    handler.release_train("T2")
    assert handler.query_transfer("A", "D", "06-02", "cost") == (
        "T1 A 06-02 08:00 -> C 06-02 11:10 30 100\n"
        "T2 C 06-02 12:00 -> D 06-02 13:00 50 200"
    )


def test_query_transfer_waits_for_next_day(handler):
    _abc(handler)
    handler.add_train("T2", "2", "200", "C|D", "50", "10:00", "60", "_",
                      "06-01|06-30", "G")
    handler.release_train("T1")
    handler.release_train("T2")
    second = handler.query_transfer("A", "D", "06-02", "time").splitlines()[1]
    assert second.startswith("T2 C 06-03 10:00 -> D")


def test_query_transfer_none_found(handler):
    _abc(handler)
    handler.release_train("T1")
    assert handler.query_transfer("A", "D", "06-02", "cost") == "0"
    assert handler.query_transfer("A", "C", "13-02", "cost") == "0"