from rich.pretty import pprint

from simplecmds import *

__docs__ = {
    FaultCode.UNKNOWN_COMMAND: "every run must start with one of the registered commands",
}


def create(args, valid, results):
    if valid:
        pprint({"created": args[0]})


def delete(args, valid, results):
    if valid:
        pprint({"deleted": args})


program = (
    Program(version="v1.0.0", description="Tiny task manager", shell=True, colorful=True)
    .command("-c --create <text>", "Create a task", create)
    .rule("<number,string>", 1)
    .command("-d --delete <id> [id]", "Delete tasks", delete)
    .rule("<number> [number]")
    .explain("Deletes one or more tasks by id.")
)


if __name__ == '__main__':
    pprint(dict(program.parse()))
