"""Ticket orders: buying, the waiting queue, refunds and order history."""

from __future__ import annotations

from bisect import insort
from dataclasses import dataclass, field
from enum import Enum

from ticketsys.timeutil import datify
from ticketsys.trains import Train, TrainHandler
from ticketsys.users import UserHandler

_FAIL = "-1"
_OK = "0"


class OrderStatus(Enum):
    """Where an order stands."""

    SUCCESS = "success"
    PENDING = "pending"
    REFUNDED = "refunded"


@dataclass
class Order:
    """Tickets on one train between two of its stations on one departure day."""

    train: Train = field(repr=False)
    start: int
    end: int
    number: int
    date: int
    status: OrderStatus = OrderStatus.SUCCESS

    @property
    def price(self) -> int:
        """Price of a single ticket."""
        stations = self.train.stations
        return stations[self.end].price - stations[self.start].price

    def __str__(self) -> str:
        start = self.train.stations[self.start]
        end = self.train.stations[self.end]
        leaving = start.leaving.shift_days(self.date)
        arriving = end.arriving.shift_days(self.date)
        return (f"[{self.status.value}] {self.train.train_id} {start.name} "
                f"{leaving} -> {end.name} {arriving} {self.price} {self.number}")


def _parse_stamp(stamp: str) -> int:
    try:
        return int(stamp[1:-1])
    except ValueError:
        return 0


class TicketHandler:
    """Sells and refunds tickets, keeping each user's orders and the waiting queues."""

    def __init__(self, users: UserHandler, trains: TrainHandler) -> None:
        self._users = users
        self._trains = trains
        self._orders: dict[int, Order] = {}
        self._user_orders: dict[str, list[int]] = {}
        self._queues: dict[tuple[str, int], list[int]] = {}

    def _record(self, username: str, stamp: int, order: Order) -> None:
        insort(self._user_orders.setdefault(username, []), stamp)
        self._orders[stamp] = order

    def buy_ticket(self, username: str, train_id: str, date: str, number: str,
                   from_station: str, to_station: str, queue: str,
                   stamp: str) -> str:
        """Buy tickets, or queue for them when ``queue`` is true; return cost or status."""
        if not self._users.logged_in(username):
            return _FAIL
        train = self._trains.get(train_id)
        if train is None or not train.released:
            return _FAIL
        day = datify(date)
        wanted = int(number)
        start = train.station_index(from_station)
        end = train.station_index(to_station)
        if start is None or end is None:
            return _FAIL
        offset = day - train.stations[start].leaving.date
        if not (start < end and train.runs_on(offset)):
            return _FAIL
        available = min(wanted, train.min_seats(offset, start, end))
        if available >= wanted:
            row = train.seats[offset]
            for k in range(start, end):
                row[k] -= wanted
            order = Order(train, start, end, wanted, offset)
            self._record(username, _parse_stamp(stamp), order)
            return str(available * order.price)
        if queue.startswith("t"):
            stamp_value = _parse_stamp(stamp)
            order = Order(train, start, end, wanted, offset, OrderStatus.PENDING)
            self._record(username, stamp_value, order)
            insort(self._queues.setdefault((train.train_id, offset), []),
                   stamp_value)
            return "queue"
        return _FAIL

    def query_order(self, username: str) -> str:
        """List the user's orders, newest first, after their count."""
        if not self._users.logged_in(username):
            return _FAIL
        stamps = self._user_orders.get(username, [])
        lines = [str(len(stamps))]
        lines.extend(str(self._orders[stamp]) for stamp in reversed(stamps))
        return "\n".join(lines)

    def refund_ticket(self, username: str, number: str) -> str:
        """Refund the user's ``number``-th most recent order."""
        if not self._users.logged_in(username):
            return _FAIL
        index = int(number)
        stamps = self._user_orders.get(username, [])
        if index <= 0 or index > len(stamps):
            return _FAIL
        stamp = stamps[-index]
        order = self._orders[stamp]
        if order.status is OrderStatus.REFUNDED:
            return _FAIL
        if order.status is OrderStatus.PENDING:
            order.status = OrderStatus.REFUNDED
            self._queues[(order.train.train_id, order.date)].remove(stamp)
            return _OK
        order.status = OrderStatus.REFUNDED
        row = order.train.seats[order.date]
        for k in range(order.start, order.end):
            row[k] += order.number
        self._serve_queue(order)
        return _OK

    def _serve_queue(self, refunded: Order) -> None:
        queue = self._queues.get((refunded.train.train_id, refunded.date), [])
        row = refunded.train.seats[refunded.date]
        for stamp in list(queue):
            waiting = self._orders[stamp]
            # Seats are checked up to the refunded order's last station.
            segment = range(waiting.start, refunded.end)
            if any(row[j] < waiting.number for j in segment):
                continue
            waiting.status = OrderStatus.SUCCESS
            for j in segment:
                row[j] -= waiting.number
            queue.remove(stamp)