import logging

from rich.pretty import pprint

from commander import *

logging.basicConfig(level=logging.WARNING)

TARGETS = {
    "linux": ("x86", "x64", "arm"),
    "windows": ("x86", "x64"),
}


def build(env, target):
    print(f"Building for {target} in {env}")
    if env == "prod":
        raise RuntimeError("Compile error: out of memory")


def add_build(shell):
    def complete_build(args):
        if not args:
            return suggestions(*TARGETS)
        return suggestions(*TARGETS.get(args[0], ()))

    @shell.command(
        name="build",
        completer=complete_build,
        validator=lambda args: len(args) >= 2 and args[1] in TARGETS.get(args[0], ()),
    )
    def build_command(commander, command, args):
        """build a target for the current environment"""
        env = commander.prefix[0] if commander.prefix else "default"
        build(env, "-".join(args))

    return build_command


if __name__ == '__main__':
    environment = Commander("%s> ")
    add_build(environment)

    shell = Commander(">>> ")
    shell.register(Command(
        "env",
        "enter an environment",
        delegate=environment,
        options=("prod", "dev"),
        completer=lambda args: suggestions("prod", "dev"),
    ))
    pprint(add_build(shell))
    shell.run()
