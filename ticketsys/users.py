"""User accounts: registration, sessions and profiles."""

from __future__ import annotations

from dataclasses import dataclass

_FAIL = "-1"
_OK = "0"
_DEFAULT_PRIVILEGE = 10


@dataclass
class User:
    """A registered account."""

    password: str
    name: str
    mail_addr: str
    privilege: int = _DEFAULT_PRIVILEGE
    logged: bool = False

    def profile(self, username: str) -> str:
        return f"{username} {self.name} {self.mail_addr} {self.privilege}"


class UserHandler:
    """Keeps the user accounts and answers user commands with response lines."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def get(self, username: str) -> User | None:
        """Return the account named ``username``, or None."""
        return self._users.get(username)

    def logged_in(self, username: str) -> bool:
        user = self._users.get(username)
        return user is not None and user.logged

    def add_user(self, cur_username: str, username: str, password: str,
                 name: str, mail_addr: str, privilege: str) -> str:
        """Register a user; the very first one needs no sponsor and gets privilege 10."""
        if not self._users:
            self._users[username] = User(password, name, mail_addr)
            return _OK
        current = self._users.get(cur_username)
        new_privilege = int(privilege)
        if (current is None or not current.logged
                or current.privilege <= new_privilege
                or username in self._users):
            return _FAIL
        self._users[username] = User(password, name, mail_addr, new_privilege)
        return _OK

    def login(self, username: str, password: str) -> str:
        user = self._users.get(username)
        if user is None or user.logged or user.password != password:
            return _FAIL
        user.logged = True
        return _OK

    def logout(self, username: str) -> str:
        user = self._users.get(username)
        if user is None or not user.logged:
            return _FAIL
        user.logged = False
        return _OK

    def _visible_target(self, current: User, cur_username: str,
                        username: str) -> User | None:
        if username == cur_username:
            return current
        target = self._users.get(username)
        if target is None or current.privilege <= target.privilege:
            return None
        return target

    def query_profile(self, cur_username: str, username: str) -> str:
        current = self._users.get(cur_username)
        if current is None or not current.logged:
            return _FAIL
        target = self._visible_target(current, cur_username, username)
        if target is None:
            return _FAIL
        return target.profile(username)

    def modify_profile(self, cur_username: str, username: str, password: str,
                       name: str, mail_addr: str, privilege: str) -> str:
        """Change the given non-empty fields of a profile and return it."""
        current = self._users.get(cur_username)
        if current is None or not current.logged:
            return _FAIL
        new_privilege = None
        if privilege:
            new_privilege = int(privilege)
            if current.privilege <= new_privilege:
                return _FAIL
        target = self._visible_target(current, cur_username, username)
        if target is None:
            return _FAIL
        if password:
            target.password = password
        if name:
            target.name = name
        if mail_addr:
            target.mail_addr = mail_addr
        if new_privilege is not None:
            target.privilege = new_privilege
        return target.profile(username)

    def exit(self) -> str:
        """Log every user out."""
        for user in self._users.values():
            user.logged = False
        return "bye"