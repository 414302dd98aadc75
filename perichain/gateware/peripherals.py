# the peripheral modules that can be chained onto the bus. each one knows which
# module to instantiate, which local signals it needs declared, which of the bus
# controller's timebases it listens to, and which external pins it owns.

# every module is instantiated the same way: the eleven bus control signals for
# its slot, then its own ports. for slot 3 that looks like:
#
#    servo4 p03(p03clk,p03rdwr,p03strobe,p03our_addr,p03addr,
#        p03busy_in,p03busy_out,p03addr_match_in,p03addr_match_out,p03datin,p03datout,
#        p03servo);
#
# the slot-named bus signals and the bc0* timebases are declared by the
# prototype top module, not here.

from collections import namedtuple

# pin directions, as seen from the FPGA
IN = "in" # the pin drives the peripheral's signal
OUT = "out" # the peripheral's signal drives the pin

BUS_PORTS = (
    "clk", "rdwr", "strobe", "our_addr", "addr",
    "busy_in", "busy_out", "addr_match_in", "addr_match_out",
    "datin", "datout",
)

# the generated text for one peripheral instance, along with where it sits
class WiringFragment(namedtuple("WiringFragment", [
    "address", # bus slot of the instance
    "pin_start", # first external pin it owns
    "pin_count", # how many consecutive pins it owns
    "text", # the verilog
])):
    __slots__ = ()

    @property
    def pin_end(self):
        # first pin the next peripheral gets
        return self.pin_start + self.pin_count

def slot_prefix(address):
    return "p{:02d}".format(address)

def pin_macro(pin):
    return "`PIN_{:02d}".format(pin)

# expand a bus signal into one (bit, direction) pin entry per bit
def _bits(name, width, direction=OUT):
    return tuple(("{}[{}]".format(name, bit), direction)
        for bit in range(width))

class Peripheral:
    # module: verilog module name, also the name of its source file
    # ports: the module's own ports after the bus signals, as suffixes of the
    #   slot prefix
    # decls: local declarations, with "{p}" standing in for the slot prefix
    # timebases: bc0 timebases bound into same-named local signals
    # pins: (signal suffix, direction) for each external pin, in pin order
    # board: (signal suffix, board net, direction) for fixed on-board I/O
    def __init__(self, module, ports=(), decls=(), timebases=(), pins=(),
            board=()):
        self.module = module
        self.ports = tuple(ports)
        self.decls = tuple(decls)
        self.timebases = tuple(timebases)
        self.pins = tuple(pins)
        self.board = tuple(board)

        for signal, direction in self.pins + tuple((s, d) for s, _, d in board):
            if direction not in (IN, OUT):
                raise ValueError("{}: bad direction {!r} for {}".format(
                    module, direction, signal))

    @property
    def pin_count(self):
        return len(self.pins)

    def __repr__(self):
        return "Peripheral({!r}, pin_count={})".format(
            self.module, self.pin_count)

    def emit(self, address, pin_start, label=None):
        p = slot_prefix(address)
        if label is None:
            label = self.module

        lines = [""]
        for decl in self.decls:
            lines.append("    {};".format(decl.format(p=p)))

        lines.append("    // {}".format(label))
        bus = ["{}{}".format(p, name) for name in BUS_PORTS]
        lines.append("    {} {}({},".format(self.module, p, ",".join(bus[:5])))
        if self.ports:
            lines.append("        {},".format(",".join(bus[5:])))
            lines.append("        {});".format(
                ",".join(p+port for port in self.ports)))
        else:
            lines.append("        {});".format(",".join(bus[5:])))

        for timebase in self.timebases:
            lines.append("    assign {}{} = bc0{};".format(p, timebase, timebase))

        for signal, net, direction in self.board:
            if direction == OUT:
                lines.append("    assign {} = {}{};".format(net, p, signal))
            else:
                lines.append("    assign {}{} = {};".format(p, signal, net))

        for pin, (signal, direction) in enumerate(self.pins, pin_start):
            if direction == OUT:
                lines.append("    assign {} = {}{};".format(
                    pin_macro(pin), p, signal))
            else:
                lines.append("    assign {}{} = {};".format(
                    p, signal, pin_macro(pin)))

        return WiringFragment(address=address, pin_start=pin_start,
            pin_count=self.pin_count, text="\n".join(lines)+"\n")


# the bus controller itself. it generates the bus signals everyone else uses,
# so it gets nothing but its own slot's bus hookup and no pins.
enumerator = Peripheral("enumerator")

# placeholder that holds a slot on the bus without using any pins
null = Peripheral("null",
    ports=["dummy"],
    decls=["wire {p}dummy"],
)

# baseboard buttons and LEDs. these are wired to the board, not the connector.
bb4io = Peripheral("bb4io",
    ports=["leds", "bntn1", "bntn2", "bntn3"],
    decls=[
        "wire [7:0] {p}leds",
        "wire {p}bntn1",
        "wire {p}bntn2",
        "wire {p}bntn3",
    ],
    board=[
        ("bntn1", "BNTN1", IN),
        ("bntn2", "BNTN2", IN),
        ("bntn3", "BNTN3", IN),
        ("leds", "LED", OUT),
    ],
)

# unipolar and bipolar stepper motor controllers
stepu = Peripheral("stepu",
    ports=["m1clk", "u100clk", "u10clk", "u1clk",
        "coila", "coilb", "coilc", "coild"],
    timebases=["m1clk", "u100clk", "u10clk", "u1clk"],
    pins=[("coila", OUT), ("coilb", OUT), ("coilc", OUT), ("coild", OUT)],
)

stepb = Peripheral("stepb",
    ports=["m1clk", "u100clk", "u10clk", "u1clk",
        "ain1", "ain2", "bin1", "bin2"],
    timebases=["m1clk", "u100clk", "u10clk", "u1clk"],
    pins=[("ain1", OUT), ("ain2", OUT), ("bin1", OUT), ("bin2", OUT)],
)

# dual DC motor H-bridge. it takes every timebase even though only some of
# them are ports.
dc2 = Peripheral("dc2",
    ports=["m100clk", "u100clk", "u10clk", "u1clk", "n100clk",
        "ain1", "ain2", "bin1", "bin2"],
    timebases=["m100clk", "m10clk", "m1clk", "u100clk", "u10clk", "u1clk",
        "n100clk"],
    pins=[("ain1", OUT), ("ain2", OUT), ("bin1", OUT), ("bin2", OUT)],
)

# 16 state pattern generator, also sold as a 4 channel PWM output
pgen16 = Peripheral("pgen16",
    ports=["m100clk", "m10clk", "m1clk", "u100clk", "u10clk", "u1clk",
        "n100clk", "pattern"],
    decls=["wire [3:0] {p}pattern"],
    timebases=["m100clk", "m10clk", "m1clk", "u100clk", "u10clk", "u1clk",
        "n100clk"],
    pins=_bits("pattern", 4),
)

# dual quadrature decoder
quad2 = Peripheral("quad2",
    ports=["m10clk", "u1clk", "a1", "a2", "b1", "b2"],
    decls=[
        "wire {p}m10clk",
        "wire {p}u1clk",
        "wire {p}a1",
        "wire {p}a2",
        "wire {p}b1",
        "wire {p}b2",
    ],
    timebases=["m10clk", "u1clk"],
    pins=[("a1", IN), ("a2", IN), ("b1", IN), ("b2", IN)],
)

# QTR reflectance sensors. the sensor lines are bidirectional, which the tri
# declaration takes care of.
qtr4 = Peripheral("qtr4",
    ports=["m10clk", "u10clk", "q"],
    decls=["wire {p}m10clk", "wire {p}u10clk", "tri [3:0] {p}q"],
    timebases=["m10clk", "u10clk"],
    pins=_bits("q", 4),
)

qtr8 = Peripheral("qtr8",
    ports=["m10clk", "u10clk", "q"],
    decls=["wire {p}m10clk", "wire {p}u10clk", "tri [7:0] {p}q"],
    timebases=["m10clk", "u10clk"],
    pins=_bits("q", 8),
)

# rotary encoder with push button and LED
roten = Peripheral("roten",
    ports=["btn", "q1", "q2", "led"],
    timebases=["pollevt"],
    pins=[("btn", IN), ("q1", IN), ("q2", IN), ("led", OUT)],
)

# 4 channel event counter, also sold as a capacitive touch sensor
count4 = Peripheral("count4",
    ports=["m10clk", "u1clk", "a", "b", "c", "d"],
    timebases=["m10clk", "u1clk"],
    pins=[("a", IN), ("b", IN), ("c", IN), ("d", IN)],
)

servo4 = Peripheral("servo4",
    ports=["servo"],
    decls=["wire [3:0] {p}servo"],
    pins=_bits("servo", 4),
)

# ultrasonic range finders. the ping line is shared between trigger and echo.
ping4 = Peripheral("ping4",
    ports=["u1clk", "m10clk", "png"],
    decls=["tri [3:0] {p}png"],
    timebases=["u1clk", "m10clk"],
    pins=_bits("png", 4),
)

# consumer IR transceiver
irio = Peripheral("irio",
    ports=["u100clk", "u1clk", "rxled", "txled", "irout", "irin"],
    decls=["tri {p}spare0", "tri {p}spare1"],
    timebases=["u100clk", "u1clk"],
    pins=[("rxled", OUT), ("txled", OUT), ("irout", OUT), ("irin", IN)],
)

# hobby RC receiver decoder
rcrx = Peripheral("rcrx",
    ports=["n100clk", "rcin", "pktled", "spare0", "spare1"],
    decls=["tri {p}spare0", "tri {p}spare1"],
    timebases=["n100clk"],
    pins=[("rcin", IN), ("pktled", OUT), ("spare0", OUT), ("spare1", OUT)],
)

# RF key fob receiver
rfob = Peripheral("rfob",
    ports=["u10clk", "m1clk", "rfdin", "rssi", "pwml", "pwmh"],
    timebases=["u10clk", "m1clk"],
    pins=[("rfdin", IN), ("rssi", IN), ("pwml", OUT), ("pwmh", OUT)],
)

# enhanced SPI port. a lot of products are just a chip on the end of it.
espi = Peripheral("espi",
    ports=["u100clk", "u10clk", "u1clk", "n100clk", "mosi", "a", "b", "miso"],
    timebases=["u100clk", "u10clk", "u1clk", "n100clk"],
    pins=[("mosi", OUT), ("a", OUT), ("b", OUT), ("miso", IN)],
)

# 8 channel 12 bit ADC, spoken to over SPI
adc12 = Peripheral("adc12",
    ports=["n100clk", "m1clk", "mosi", "a", "b", "miso"],
    decls=[
        "wire {p}n100clk",
        "wire {p}m1clk",
        "wire {p}mosi",
        "wire {p}a",
        "wire {p}b",
        "wire {p}miso",
    ],
    timebases=["n100clk", "m1clk"],
    pins=[("mosi", OUT), ("a", OUT), ("b", OUT), ("miso", IN)],
)

# four strings of WS2812 RGB LEDs
ws2812 = Peripheral("ws2812",
    ports=["led1", "led2", "led3", "led4"],
    pins=[("led1", OUT), ("led2", OUT), ("led3", OUT), ("led4", OUT)],
)

# plain outputs, and the same thing for relay/latching outputs
out4 = Peripheral("out4",
    ports=["bitout"],
    decls=["wire [3:0] {p}bitout"],
    pins=_bits("bitout", 4),
)

out4l = Peripheral("out4l",
    ports=["bitout"],
    decls=["wire [3:0] {p}bitout"],
    pins=_bits("bitout", 4),
)

gpio4 = Peripheral("gpio4",
    ports=["sbio"],
    decls=["tri [3:0] {p}sbio"],
    pins=_bits("sbio", 4),
)

# plain inputs, reported on the poll event
in4 = Peripheral("in4",
    ports=["in"],
    decls=["wire [3:0] {p}in"],
    timebases=["pollevt"],
    pins=_bits("in", 4, IN),
)

# the remaining peripherals talk to a daughter card over the four odd
# numbered connector pins (2, 4, 6, 8 on the card). pin 8 is the card's
# return line when it has one.
_card_ports = ["pin2", "pin4", "pin6", "pin8"]
_card_out = [("pin2", OUT), ("pin4", OUT), ("pin6", OUT), ("pin8", OUT)]
_card_io = [("pin2", OUT), ("pin4", OUT), ("pin6", OUT), ("pin8", IN)]
_card_decls = ["wire {p}pin2", "wire {p}pin4", "wire {p}pin6", "wire {p}pin8"]

# 32 outputs on shift registers. its u10clk is left to the module's default.
out32 = Peripheral("out32",
    ports=["u10clk", *_card_ports],
    pins=_card_out,
)

lcd6 = Peripheral("lcd6",
    ports=["u100clk", *_card_ports],
    decls=["wire {p}u100clk", *_card_decls],
    timebases=["u100clk"],
    pins=_card_out,
)

io8 = Peripheral("io8",
    ports=["u10clk", *_card_ports],
    decls=["wire {p}u10clk", *_card_decls],
    timebases=["u10clk"],
    pins=_card_io,
)

# text interface: keypad and character display
tif = Peripheral("tif",
    ports=["u1clk", "m10clk", *_card_ports],
    timebases=["u1clk", "m10clk"],
    pins=_card_io,
)

# 8 channel ultrasonic card
us8 = Peripheral("us8",
    ports=["n100clk", "u10clk", "m10clk", *_card_ports],
    timebases=["n100clk", "u10clk", "m10clk"],
    pins=_card_io,
)

in32 = Peripheral("in32",
    ports=["u10clk", *_card_ports],
    decls=["wire {p}u10clk", *_card_decls],
    timebases=["u10clk"],
    pins=_card_io,
)

# I2C bridge on a card
ei2c = Peripheral("ei2c",
    ports=_card_ports,
    decls=_card_decls,
    pins=_card_io,
)

# all the modules by name. this is the closed set; the registry only ever
# points into it.
PERIPHERALS = {p.module: p for p in (
    enumerator, null, bb4io, stepu, stepb, dc2, pgen16, quad2, qtr4, qtr8,
    roten, count4, servo4, ping4, irio, rcrx, rfob, espi, adc12, ws2812,
    out4, out4l, gpio4, in4, out32, lcd6, io8, tif, us8, in32, ei2c,
)}
