"""
Headless CHIP-8 runner: load a ROM, run it for a number of frames, print the screen
"""

import argparse
import sys

from vip8 import Chip8, PRNGKeySource, load_config
from vip8.errors import Chip8Error
from vip8.logging import MachineLogger
from vip8.runner import run_frames

# Conventional COSMAC VIP keypad on a QWERTY keyboard
KEY_MAP = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def parse_key(text):
    """Key index as a hex digit, e.g. ``a`` or ``0xA``."""
    try:
        value = int(text, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a key: {text!r}")
    if not 0 <= value <= 0xF:
        raise argparse.ArgumentTypeError(f"key out of range: {text!r}")
    return value


def render_ascii(display, on="#", off="."):
    """Framebuffer as text, one line per row."""
    width, height = display.shape
    return "\n".join(
        "".join(on if display[x, y] else off for x in range(width)) for y in range(height)
    )


def build_parser():
    parser = argparse.ArgumentParser(description="Run a CHIP-8 ROM headlessly")
    parser.add_argument("rom", help="Path to the ROM file")
    parser.add_argument("--frames", type=int, default=600, help="Frames to run (60 per second)")
    parser.add_argument("--config", default=None, help="YAML configuration file")
    parser.add_argument("--press", type=parse_key, action="append", default=[],
                        help="Hold a key (hex digit) for the whole run; repeatable")
    parser.add_argument("--qwerty", action="append", default=[], choices=sorted(KEY_MAP),
                        help="Hold a key by its QWERTY position; repeatable")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--no-screen", action="store_true", help="Do not print the display at exit")
    parser.add_argument("overrides", nargs="*", default=[],
                        help="Configuration overrides, e.g. cycles_per_frame=15 quirks.shift_uses_vy=false")
    return parser


def main(argv=None):
    args = build_parser().parse_intermixed_args(argv)

    try:
        config = load_config(args.config, args.overrides)
    except Chip8Error as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger = MachineLogger(log_level=config.log_level)
    machine = Chip8(quirks=config.quirks, rng=PRNGKeySource(config.seed), logger=logger)

    try:
        with open(args.rom, "rb") as f:
            machine.load_rom(f.read())
    except (OSError, Chip8Error) as e:
        logger.error(f"Cannot load {args.rom}: {e}")
        return 1

    for key in args.press + [KEY_MAP[k] for k in args.qwerty]:
        machine.set_key(key, True)

    logger.info(f"Running {args.frames} frames at {config.instruction_frequency} instructions/s")
    report = run_frames(machine, args.frames, config.cycles_per_frame, progress=args.progress)

    if not args.no_screen:
        print(render_ascii(machine.get_display()))
    if machine.sound_active():
        logger.info("Sound timer active at exit")
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
