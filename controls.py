"""Typed control commands for a running session."""

from config import HANDS, WAVEFORMS

HAND_ALIASES = {"h": "hour", "m": "minute", "s": "second"}

HELP = (
    "rate <-100..100> | octave <h|m|s> <n> | volume <h|m|s> <0..1> | "
    f"wave <{'|'.join(WAVEFORMS)}> | mute | unmute | sound | sync | quit"
)


class CommandError(ValueError):
    """Raised for input the control surface cannot apply."""


class QuitRequested(Exception):
    """Raised by the quit command to stop the frame loop."""


def resolve_hand(name: str) -> str:
    name = name.lower()
    name = HAND_ALIASES.get(name, name)
    if name not in HANDS:
        raise CommandError(f"Unknown hand: {name}")
    return name


def _number(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise CommandError(f"Not a number: {value}") from None


def apply_command(session, line: str) -> str:
    """Apply one command line to the session and return a status message."""
    parts = line.strip().split()
    if not parts:
        return ""
    command, args = parts[0].lower(), parts[1:]

    if command == "rate":
        if len(args) != 1:
            raise CommandError("usage: rate <-100..100>")
        session.set_rate(_number(args[0]))
        return f"Speed {session.clock.rate_label()}"

    if command == "octave":
        if len(args) != 2:
            raise CommandError("usage: octave <hand> <n>")
        hand = resolve_hand(args[0])
        octave = session.set_octave(hand, args[1])
        return f"{hand.capitalize()} octave {octave}"

    if command in ("volume", "vol", "gain"):
        if len(args) != 2:
            raise CommandError("usage: volume <hand> <0..1>")
        hand = resolve_hand(args[0])
        gain = session.set_gain(hand, _number(args[1]))
        return f"{hand.capitalize()} volume {gain:.2f}"

    if command == "wave":
        if len(args) != 1 or args[0].lower() not in WAVEFORMS:
            raise CommandError(f"usage: wave <{'|'.join(WAVEFORMS)}>")
        session.set_waveform(args[0].lower())
        return f"Waveform {session.waveform}"

    if command in ("mute", "unmute", "sound"):
        if command == "sound":
            on = session.toggle_sound()
        else:
            on = session.set_sound(command == "unmute")
        if command != "mute" and not on and session.audio_error:
            return session.audio_error
        return "Sound on" if on else "Muted"

    if command == "sync":
        session.sync()
        return f"Synced to {session.clock.readout()}"

    if command in ("quit", "exit", "q"):
        raise QuitRequested()

    if command in ("help", "?"):
        return HELP

    raise CommandError(f"Unknown command: {command}")
