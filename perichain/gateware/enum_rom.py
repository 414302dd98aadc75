# the enumerator ROM as the bus controller sees it: a byte wide block RAM
# preloaded with the packed image. having it as gateware means a packed image
# can be read back in simulation exactly the way the host will read it.

from amaranth import *
from amaranth.hdl.mem import Memory

from ..rom import ROM_CAPACITY

# Register Map

# 0x000-0x7FF: (R) ROM byte. reads have one cycle of latency, like every other
#                  peripheral on the bus.

class EnumeratorROM(Elaboratable):
    def __init__(self, image, depth=ROM_CAPACITY):
        image = bytes(image)
        if len(image) > depth:
            raise ValueError("image is {} bytes but the ROM holds {}".format(
                len(image), depth))

        self.mem = Memory(width=8, depth=depth, init=list(image))

        # bus inputs
        self.i_re = Signal()
        self.i_addr = Signal(range(depth))
        self.o_rdata = Signal(8)

    def elaborate(self, platform):
        m = Module()

        m.submodules.rd = rd = self.mem.read_port(transparent=False)
        m.d.comb += [
            rd.addr.eq(self.i_addr),
            rd.en.eq(self.i_re),
            self.o_rdata.eq(rd.data),
        ]

        return m
