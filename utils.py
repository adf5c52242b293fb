DEBUG_MODE = False  # Quiet by default; the front ends turn this on with --debug


def set_debug(value):
    """
    Turn interpreter trace output on or off

    Args:
        value (bool): True to print CPU/VM traces, False to silence them
    """
    global DEBUG_MODE
    DEBUG_MODE = bool(value)


def debug_print(text):
    """
    Print a trace line when debug mode is on.

    Args:
        text (str): The text to print.
    """
    if DEBUG_MODE:
        print(text)


def format_opcode(opcode):
    return f"{opcode & 0xFFFF:04X}"


def format_state(state):
    """One-line register dump from a Chip8.get_cpu_state() dict"""
    regs = " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(state["V"]))
    return (
        f"PC={state['PC']:03X} I={state['I']:03X} SP={state['SP']} "
        f"DT={state['delay']} ST={state['sound']} {regs}"
    )
