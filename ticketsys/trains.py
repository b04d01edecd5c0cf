"""Trains: timetables, seat inventory, releases and route queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from operator import attrgetter

from ticketsys.timeutil import Time, datify, parse_clock

_FAIL = "-1"
_OK = "0"
_SALE_DAYS = 100
_INT_MAX = 2**31 - 1
_NO_LIMIT = 100_000_000


@dataclass
class Station:
    """A stop on a train's route, with times relative to the departure day."""

    name: str
    arriving: Time
    leaving: Time
    price: int


@dataclass
class Train:
    """A train's timetable and the seats left per departure day and segment."""

    train_id: str
    train_type: str
    stations: list[Station]
    seats: dict[int, list[int]] = field(default_factory=dict)
    released: bool = False
    serial: int = 0

    def station_index(self, name: str) -> int | None:
        """Position of the station called ``name`` on the route, or None."""
        return next((i for i, station in enumerate(self.stations)
                     if station.name == name), None)

    def runs_on(self, day: int) -> bool:
        """Whether the train departs on ``day`` (counted from its first station)."""
        if not 0 <= day < _SALE_DAYS:
            return False
        row = self.seats.get(day)
        return row is not None and row[-1] > 0

    def min_seats(self, day: int, start: int, end: int) -> int:
        """Fewest seats left on the segments between stations ``start`` and ``end``."""
        return min(self.seats[day][start:end], default=_NO_LIMIT)


def parse_train(train_id: str, station_num: str, seat_num: str, stations: str,
                prices: str, start_time: str, travel_times: str,
                stopover_times: str, sale_date: str, train_type: str) -> Train:
    """Build a train from the ``|``-separated fields of an ``add_train`` command."""
    count_ = int(station_num)
    seat_count = int(seat_num)
    names = stations.split("|")
    price_steps = prices.split("|")
    travels = travel_times.split("|")
    stopovers = stopover_times.split("|")
    last = count_ - 1

    route: list[Station] = []
    current = parse_clock(start_time)
    price = 0
    for i in range(count_):
        if i == 0:
            arriving = Time.none()
        else:
            arriving = current
            if i < last:
                current = current.plus(int(stopovers[i - 1]))
            price += int(price_steps[i - 1])
        if i == last:
            leaving = Time.none()
        else:
            leaving = current
            current = current.plus(int(travels[i]))
        route.append(Station(names[i], arriving, leaving, price))

    first_sale, last_sale = (datify(part) for part in sale_date.split("|")[:2])
    seats = {day: [seat_count] * count_ for day in range(first_sale, last_sale + 1)}
    return Train(train_id, train_type[:1], route, seats)


@dataclass
class _Leg:
    train_id: str
    start: str
    leaving: Time
    end: str
    arriving: Time
    price: int
    seat: int

    def __str__(self) -> str:
        return (f"{self.train_id} {self.start} {self.leaving} -> "
                f"{self.end} {self.arriving} {self.price} {self.seat}")

    @property
    def duration(self) -> int:
        return self.arriving - self.leaving


class TrainHandler:
    """Keeps the trains and answers train commands with response lines."""

    def __init__(self) -> None:
        self._trains: dict[str, Train] = {}
        self._by_station: dict[str, list[Train]] = {}
        self._serials = count()

    def get(self, train_id: str) -> Train | None:
        """Return the train with ``train_id``, or None."""
        return self._trains.get(train_id)

    def _trains_at(self, name: str) -> list[Train]:
        return sorted(self._by_station.get(name, ()), key=attrgetter("serial"))

    def add_train(self, train_id: str, station_num: str, seat_num: str,
                  stations: str, prices: str, start_time: str,
                  travel_times: str, stopover_times: str, sale_date: str,
                  train_type: str) -> str:
        if train_id in self._trains:
            return _FAIL
        train = parse_train(train_id, station_num, seat_num, stations, prices,
                            start_time, travel_times, stopover_times,
                            sale_date, train_type)
        train.serial = next(self._serials)
        self._trains[train_id] = train
        return _OK

    def delete_train(self, train_id: str) -> str:
        train = self._trains.get(train_id)
        if train is None or train.released:
            return _FAIL
        del self._trains[train_id]
        return _OK

    def release_train(self, train_id: str) -> str:
        train = self._trains.get(train_id)
        if train is None or train.released:
            return _FAIL
        for station in train.stations:
            self._by_station.setdefault(station.name, []).append(train)
        train.released = True
        return _OK

    def query_train(self, train_id: str, date: str) -> str:
        train = self._trains.get(train_id)
        day = datify(date)
        if train is None or day <= 0 or not train.runs_on(day):
            return _FAIL
        lines = [f"{train.train_id} {train.train_type}"]
        last = len(train.stations) - 1
        for i, station in enumerate(train.stations):
            arriving = station.arriving
            leaving = station.leaving
            if arriving.date != -1:
                arriving = arriving.shift_days(day)
            if leaving.date != -1:
                leaving = leaving.shift_days(day)
            seat = "x" if i == last else str(train.seats[day][i])
            lines.append(f"{station.name} {arriving} -> {leaving} "
                         f"{station.price} {seat}")
        return "\n".join(lines)

    def query_ticket(self, from_station: str, to_station: str, date: str,
                     preference: str) -> str:
        day = datify(date)
        if day <= 0:
            return "0"
        arriving_ids = {train.train_id for train in self._trains_at(to_station)}
        results: list[_Leg] = []
        for train in self._trains_at(from_station):
            if train.train_id not in arriving_ids:
                continue
            start = train.station_index(from_station)
            end = train.station_index(to_station)
            offset = day - train.stations[start].leaving.date
            if start < end and train.runs_on(offset):
                results.append(_Leg(
                    train.train_id, from_station,
                    train.stations[start].leaving.shift_days(offset),
                    to_station,
                    train.stations[end].arriving.shift_days(offset),
                    train.stations[end].price - train.stations[start].price,
                    train.min_seats(offset, start, end),
                ))
        if preference.startswith("c"):
            results.sort(key=lambda leg: (leg.price, leg.train_id))
        else:
            results.sort(key=lambda leg: (leg.duration, leg.train_id))
        return "\n".join([str(len(results)), *map(str, results)])

    def query_transfer(self, from_station: str, to_station: str, date: str,
                       preference: str) -> str:
        day = datify(date)
        if day <= 0:
            return "0"
        by_cost = preference.startswith("c")

        def rank(first: _Leg, second: _Leg) -> tuple:
            total = first.price + second.price
            duration = second.arriving - first.leaving
            if by_cost:
                return (total, duration, first.train_id, second.train_id)
            return (duration, total, first.train_id, second.train_id)

        best: tuple[_Leg, _Leg] | None = None
        best_rank: tuple | None = None
        for first_train in self._trains_at(from_station):
            start = first_train.station_index(from_station)
            offset = day - first_train.stations[start].leaving.date
            if offset <= 0 or not first_train.runs_on(offset):
                continue
            leaving = first_train.stations[start].leaving.shift_days(offset)
            price = 0
            seat = _INT_MAX
            for exchange in range(start + 1, len(first_train.stations)):
                stop = first_train.stations[exchange]
                price += stop.price - first_train.stations[exchange - 1].price
                seat = min(seat, first_train.seats[offset][exchange - 1])
                arriving = stop.arriving.shift_days(offset)
                first_leg = _Leg(first_train.train_id, from_station, leaving,
                                 stop.name, arriving, price, seat)
                for second_train in self._trains_at(stop.name):
                    second = self._second_leg(second_train, stop.name,
                                              arriving, to_station)
                    if second is None:
                        continue
                    candidate = rank(first_leg, second)
                    if best_rank is None or candidate < best_rank:
                        best, best_rank = (first_leg, second), candidate
        if best is None:
            return "0"
        return f"{best[0]}\n{best[1]}"

    @staticmethod
    def _second_leg(train: Train, exchange: str, arrival: Time,
                    to_station: str) -> _Leg | None:
        board = train.station_index(exchange)
        boarding = train.stations[board].leaving
        offset = arrival.date - boarding.date
        if boarding.time <= arrival.time:
            offset += 1
        if offset <= 0 or not train.runs_on(offset):
            return None
        seat = _INT_MAX
        for k in range(board + 1, len(train.stations)):
            seat = min(seat, train.seats[offset][k - 1])
            stop = train.stations[k]
            if stop.name != to_station:
                continue
            return _Leg(train.train_id, exchange, boarding.shift_days(offset),
                        to_station, stop.arriving.shift_days(offset),
                        stop.price - train.stations[board].price, seat)
        return None