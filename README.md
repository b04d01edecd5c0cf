# ticketsys

A small train ticket booking system driven by text commands. It keeps
user accounts with privilege levels, trains with their stations, prices,
timetables and daily seat counts, and ticket orders that succeed, wait
in a queue for seats, or are refunded.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

The `ticketsys` command reads commands from standard input, one per line,
and writes one answer per command. Every line starts with a timestamp in
square brackets, which is echoed in front of the answer:

```
ticketsys < commands.txt
```

A short session:

```
[1] add_user -c admin -u alice -p password -n Alice -m alice@example.com -g 10
[2] login -u alice -p password
[3] query_profile -c alice -u alice
[4] exit
```

produces

```
[1] 0
[2] 0
[3] alice Alice alice@example.com 10
[4] bye
```

Reading stops after `exit` or at the end of the input. An unknown
command or an option letter that the command does not take stops the
run: a message starting with `error:` goes to standard error and the
command exits with status 1.

The first user added gets privilege 10, whatever `-c` and `-g` say.
Later users can only be added by a logged-in user whose privilege is
higher than the new user's, and only under a name not yet taken.

## Commands

Options are given as `-<letter> <value>` pairs in any order.

| Command          | Options                                                                 |
|------------------|-------------------------------------------------------------------------|
| `add_user`       | `-c` current user, `-u` user, `-p` password, `-n` name, `-m` mail, `-g` privilege |
| `login`          | `-u` user, `-p` password                                                |
| `logout`         | `-u` user                                                               |
| `query_profile`  | `-c` current user, `-u` user                                            |
| `modify_profile` | `-c` current user, `-u` user, optional `-p`, `-n`, `-m`, `-g`            |
| `add_train`      | `-i` id, `-n` station count, `-m` seats, `-s` stations, `-p` prices, `-x` start time, `-t` travel times, `-o` stopover times, `-d` sale dates, `-y` type |
| `delete_train`   | `-i` id (only trains not yet released)                                  |
| `release_train`  | `-i` id                                                                 |
| `query_train`    | `-i` id, `-d` date                                                      |
| `query_ticket`   | `-s` from, `-t` to, `-d` date, optional `-p cost` (default) or `-p time` |
| `query_transfer` | `-s` from, `-t` to, `-d` date, optional `-p cost` (default) or `-p time` |
| `buy_ticket`     | `-u` user, `-i` train, `-d` date, `-n` count, `-f` from, `-t` to, optional `-q true` |
| `refund_ticket`  | `-u` user, optional `-n` order number (default 1, the most recent)      |
| `query_order`    | `-u` user                                                               |
| `exit`           | none; logs every user out and prints `bye`                              |

List values in `add_train` are separated by `|`, for example
`-s Shanghai|Suzhou|Nanjing -p 20|30`. The sale dates are a first and a
last date, `06-01|08-17`. Dates are written `MM-DD` and cover June to
September; times are written `HH:MM`.

A failed command answers `-1`. `query_ticket` answers the number of
matching trains followed by one line per train; `query_transfer` answers
the best two-train journey, or `0` when there is none. `buy_ticket`
answers the total price, or `queue` when the order was put in the
waiting queue with `-q true`. When a ticket is refunded, waiting orders
on the same train and day are served in the order they were placed.

## Using it from Python

```python
from ticketsys.cli import TicketSystem

system = TicketSystem()
print(system.execute("[1] add_user -c admin -u alice -p password -n Alice -m alice@example.com -g 10"))
```

`TicketSystem.execute` runs one line and returns the stamped answer; it
raises `ticketsys.cli.CommandError` for an unknown command or option.
`TicketSystem.run` takes an iterable of lines and yields the answers,
each ending in a newline except the one for `exit`. The handlers are
reachable as `system.users` (`ticketsys.users.UserHandler`),
`system.trains` (`ticketsys.trains.TrainHandler`) and `system.tickets`
(`ticketsys.tickets.TicketHandler`). Date and clock helpers such as
`datify` and `Time` live in `ticketsys.timeutil`.

## What it does not do

All users, trains and orders are held in memory. Nothing is written to
disk, so every run of `ticketsys` starts with no users and no trains.