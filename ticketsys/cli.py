"""Command-line front end: reads stamped commands and prints stamped replies."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from ticketsys.tickets import TicketHandler
from ticketsys.trains import TrainHandler
from ticketsys.users import UserHandler


class CommandError(ValueError):
    """Raised for an unknown command or option."""


def parse_options(tokens: list[str]) -> dict[str, str]:
    """Pair ``-k value`` tokens into a mapping from option letter to value."""
    options: dict[str, str] = {}
    pending = iter(tokens)
    for flag in pending:
        if len(flag) < 2:
            raise CommandError(f"malformed option {flag!r}")
        options[flag[1]] = next(pending, "")
    return options


class _Spec(NamedTuple):
    action: Callable[..., str]
    keys: str
    defaults: dict[str, str]
    stamped: bool = False


class TicketSystem:
    """Ties the user, train and ticket handlers to the text command protocol."""

    def __init__(self) -> None:
        self.users = UserHandler()
        self.trains = TrainHandler()
        self.tickets = TicketHandler(self.users, self.trains)
        self.finished = False
        preference = {"p": "cost"}
        self._commands: dict[str, _Spec] = {
            "add_user": _Spec(self.users.add_user, "cupnmg", {}),
            "login": _Spec(self.users.login, "up", {}),
            "logout": _Spec(self.users.logout, "u", {}),
            "query_profile": _Spec(self.users.query_profile, "cu", {}),
            "modify_profile": _Spec(self.users.modify_profile, "cupnmg", {}),
            "add_train": _Spec(self.trains.add_train, "inmspxtody", {}),
            "delete_train": _Spec(self.trains.delete_train, "i", {}),
            "release_train": _Spec(self.trains.release_train, "i", {}),
            "query_train": _Spec(self.trains.query_train, "id", {}),
            "query_ticket": _Spec(self.trains.query_ticket, "stdp", preference),
            "query_transfer": _Spec(self.trains.query_transfer, "stdp",
                                    preference),
            "buy_ticket": _Spec(self.tickets.buy_ticket, "uidnftq",
                                {"q": "false"}, stamped=True),
            "refund_ticket": _Spec(self.tickets.refund_ticket, "un", {"n": "1"}),
            "query_order": _Spec(self.tickets.query_order, "u", {}),
        }

    def execute(self, line: str) -> str:
        """Run one stamped command line and return the stamped reply."""
        stamp, _, rest = line.partition(" ")
        command, *tokens = rest.split(" ")
        if command == "exit":
            self.finished = True
            return f"{stamp} {self.users.exit()}"
        spec = self._commands.get(command)
        if spec is None:
            raise CommandError(f"unknown command {command!r}")
        options = parse_options(tokens)
        unknown = set(options) - set(spec.keys)
        if unknown:
            raise CommandError(
                f"unknown option(s) {''.join(sorted(unknown))!r} for {command}")
        args = [options.get(key, spec.defaults.get(key, "")) for key in spec.keys]
        if spec.stamped:
            args.append(stamp)
        return f"{stamp} {spec.action(*args)}"

    def run(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield the output for each line, stopping after ``exit``."""
        for line in lines:
            reply = self.execute(line.rstrip("\n"))
            if self.finished:
                yield reply
                return
            yield reply + "\n"


def main(argv: list[str] | None = None) -> int:
    """Serve commands from standard input until ``exit`` or end of input."""
    system = TicketSystem()
    try:
        for chunk in system.run(sys.stdin):
            sys.stdout.write(chunk)
    except CommandError as error:
        sys.stdout.flush()
        sys.stderr.write(f"error: {error}\n")
        return 1
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())