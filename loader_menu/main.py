import argparse
from pathlib import Path

from loader_menu.loader.control import BootHandoff, LoaderBootControl, SessionConfig
from loader_menu.loader.environment import Environment
from loader_menu.logging import LoggerFactory, setup_logging
from loader_menu.menu import MenuEngine, carousel_store
from loader_menu.menu.definitions import build_menu_model
from loader_menu.ui.terminal import TerminalInput, TextRenderer


def build_parser():
    parser = argparse.ArgumentParser(description="Console boot menu")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--trace", action="store_true", help="Log every keypress and redraw")
    parser.add_argument("--log-dir", type=Path, default=None, help="Directory for log files")
    parser.add_argument(
        "--kernel",
        action="append",
        dest="kernels",
        default=None,
        metavar="NAME",
        help="Kernel offered by the kernel carousel (repeatable, first is default)",
    )
    parser.add_argument(
        "--bootenv",
        action="append",
        dest="bootenvs",
        default=[],
        metavar="NAME",
        help="ZFS boot environment (repeatable, first is default)",
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="assignments",
        default=[],
        metavar="NAME=VALUE",
        help="Seed a loader environment variable, e.g. autoboot_delay=NO",
    )
    parser.add_argument("--single-user", action="store_true", help="Start with boot_single=YES")
    parser.add_argument("--i386", action="store_true", help="Offer the ACPI toggle")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug, trace=args.trace, log_dir=args.log_dir)
    log = LoggerFactory.for_system()

    try:
        env = Environment.from_assignments(args.assignments)
    except ValueError as error:
        log.error(str(error))
        return 2
    if args.single_user:
        env.setenv("boot_single", "YES")

    boot = LoaderBootControl(
        env,
        kernels=args.kernels or ["kernel"],
        bootenvs=args.bootenvs,
        system_386=args.i386,
    )
    config = SessionConfig(env)
    model = build_menu_model(boot, config, env, carousel_store)
    renderer = TextRenderer()

    try:
        with TerminalInput() as keyboard:
            engine = MenuEngine(model, renderer, keyboard, boot, env, carousels=carousel_store)
            engine.run()
    except BootHandoff as handoff:
        renderer.clear_screen()
        renderer.set_cursor(1, 1)
        renderer.write(f"{handoff.action}:\n")
        for name, value in sorted(handoff.environment.items()):
            renderer.write(f"  {name}={value}\n")
        log.info(f"Session ended with {handoff.action}")
    except (KeyboardInterrupt, EOFError):
        renderer.write("\n")
        log.info("Menu interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
