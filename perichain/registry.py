# the table of peripherals a description file can name. several names can
# point at the same hardware: "avr" is an espi peripheral in the FPGA, but the
# host needs to load the avr driver for it, so the ROM records "avr". this is
# the table of aliases, or, if you will, the table of host drivers.

from collections import namedtuple

from .errors import UnknownPeripheral
from .gateware.peripherals import PERIPHERALS

class Descriptor(namedtuple("Descriptor", [
    "type_name", # name used in the description file and the wiring label
    "include_name", # verilog source to include, without the .v
    "driver_id", # host driver name recorded in the enumerator ROM
    "peripheral", # the module that gets instantiated
])):
    __slots__ = ()

    @property
    def module_name(self):
        return self.peripheral.module

    @property
    def pin_count(self):
        return self.peripheral.pin_count

    def emit(self, address, pin_start):
        return self.peripheral.emit(address, pin_start, label=self.type_name)

# (type name, include name, driver id, module)
_ENUMERATORS = [
    ("enumerator", "enumerator", "enumerator", "enumerator"),
    ("bb4io", "bb4io", "bb4io", "bb4io"),
    ("servo4", "servo4", "servo4", "servo4"),
    ("stepu", "stepu", "stepu", "stepu"),
    ("stepb", "stepb", "stepb", "stepb"),
    ("dc2", "dc2", "dc2", "dc2"),
    ("aamp", "out4", "aamp", "out4"),
    ("pgen16", "pgen16", "pgen16", "pgen16"),
    ("pwmout4", "pgen16", "pwmout4", "pgen16"),
    ("quad2", "quad2", "quad2", "quad2"),
    ("qtr4", "qtr4", "qtr4", "qtr4"),
    ("qtr8", "qtr8", "qtr8", "qtr8"),
    ("roten", "roten", "roten", "roten"),
    ("count4", "count4", "count4", "count4"),
    ("touch4", "count4", "touch4", "count4"),
    ("ping4", "ping4", "ping4", "ping4"),
    ("irio", "irio", "irio", "irio"),
    ("espi", "espi", "espi", "espi"),
    ("dac8", "espi", "dac8", "espi"),
    ("qpot", "espi", "qpot", "espi"),
    ("rtc", "espi", "rtc", "espi"),
    ("avr", "espi", "avr", "espi"),
    ("adc812", "adc12", "adc812", "adc12"),
    ("slide4", "adc12", "slide4", "adc12"),
    ("out4", "out4", "out4", "out4"),
    ("out4l", "out4l", "out4l", "out4l"),
    ("ws2812", "ws2812", "ws2812", "ws2812"),
    ("rly4", "out4l", "rly4", "out4l"),
    # the drv4 board has always loaded the drv3 driver
    ("drv4", "out4", "drv3", "out4"),
    ("hub4", "out4", "hub4", "out4"),
    ("gpio4", "gpio4", "gpio4", "gpio4"),
    ("out32", "out32", "out32", "out32"),
    ("lcd6", "lcd6", "lcd6", "lcd6"),
    ("in4", "in4", "in4", "in4"),
    ("sw4", "in4", "sw4", "in4"),
    ("io8", "io8", "io8", "io8"),
    ("tif", "tif", "tif", "tif"),
    ("us8", "us8", "us8", "us8"),
    ("in32", "in32", "in32", "in32"),
    ("ei2c", "ei2c", "ei2c", "ei2c"),
    ("rcrx", "rcrx", "rcrx", "rcrx"),
    ("rfob", "rfob", "rfob", "rfob"),
    ("null", "null", "null", "null"),
]

REGISTRY = tuple(
    Descriptor(type_name, include_name, driver_id, PERIPHERALS[module])
    for type_name, include_name, driver_id, module in _ENUMERATORS)

_by_name = {d.type_name: d for d in REGISTRY}
if len(_by_name) != len(REGISTRY):
    raise RuntimeError("duplicate peripheral names in registry")

def names():
    return [d.type_name for d in REGISTRY]

# find the descriptor for the given name. the name must match exactly.
def resolve(name):
    try:
        return _by_name[name]
    except KeyError:
        raise UnknownPeripheral(name) from None
