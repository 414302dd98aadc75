# the globally visible definitions shared by every part of the FPGA design.
# nothing here is computed, the values are fixed by the host protocol and the
# bus controller. they're kept here (vs. only in sysdefs.h) so that host code
# can import them without any external dependencies.

import collections

# make a namedtuple class that can hold the given kwargs names, then create an
# instance with the kwargs values and return it. field order is kept, which is
# also the order the header lists them in.
def _namedtupleton(obj_name, **kwargs):
    nt = collections.namedtuple(obj_name, kwargs.keys())
    return nt(**kwargs)

# a host command is a command byte, two bytes of register address, a word
# transfer count and, if writing, the data. the command byte has the operation,
# the word length and the same/increment register flag. two bits are reserved.
CMD = _namedtupleton("cmd",
    OP_FIELD=0x0C,
    OP_READ=0x04,
    OP_WRITE=0x08,
    OP_WRRD=0x30,
    SAME_FIELD=0x02,
    SAME_REG=0x00, # every word goes to the same register (FIFO style)
    SUCC_REG=0x02, # each word goes to the next register
    LEN_FIELD=0x01,
    WORD8=0x00,
    WORD16=0x01,
)

# the power states of the FPGA.
#   FULLON: everything runs
#   DOZE: peripherals that need precise timing (PWM in and out, servo and
#       H-bridge controllers, serial ports) are stopped and the system clock
#       drops to 1000Hz, which is still enough to talk to the host
#   SLEEP: 1000Hz clock and everything is off except the bus interface, which
#       is needed to wake back up
#   RESET: every peripheral reloads its default values and state
SYS = _namedtupleton("sys",
    FULLON=0b11,
    DOZE=0b10,
    SLEEP=0b01,
    RESET=0b00,
)

def _define(name, bits, value, radix):
    if radix == "h":
        literal = "{}'h{:0{}X}".format(bits, value, (bits+3)//4)
    else:
        literal = "{}'b{:0{}b}".format(bits, value, bits)
    return "`define {:<18}{}".format(name, literal)

# render the constants as the verilog header the rest of the design includes
def render_header():
    lines = [
        "// sysdefs.h: the globally visible definitions used in the design.",
        "// generated, do not edit.",
        "",
        "// host command byte fields",
    ]
    for name, value in CMD._asdict().items():
        lines.append(_define("CMD_"+name, 8, value, "h"))
    lines.append("")
    lines.append("// FPGA power states")
    for name, value in SYS._asdict().items():
        lines.append(_define("SYS_"+name, 2, value, "b"))
    lines.append("")
    return "\n".join(lines)
