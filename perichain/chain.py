# build the chain of peripherals. every peripheral gets the next bus slot and
# the next block of connector pins, its wiring is generated, and its host
# driver name goes into the enumerator ROM.

import logging
from collections import namedtuple

from .descfile import HEADER_LINES
from .errors import NotEnoughHeaderStrings
from .registry import resolve
from .rom import ROMImage

log = logging.getLogger(__name__)

COMMENT = "#"
END_OF_WIRING = "\nendmodule\n"

# the sources every build includes, ahead of the peripherals' own
BASE_INCLUDES = ("sysdefs.h", "main.v", "bus_ctrl.v", "ft245.v", "slip.v",
    "busif.v")

Instance = namedtuple("Instance", [
    "address", # bus slot, counting from 0 in file order
    "pin_start", # first connector pin
    "pin_count", # number of connector pins, fixed by the peripheral type
    "descriptor", # registry entry it was built from
])

def include_line(name):
    return "`include \"{}\"\n".format(name)

def pin_range(pin_start, pin_count):
    if pin_count == 0:
        return "no pins"
    return "pins {}-{}".format(pin_start, pin_start+pin_count-1)

class Chain:
    def __init__(self, instances, fragments, rom):
        self.instances = tuple(instances)
        self.fragments = tuple(fragments)
        self.rom = rom

    @property
    def pins_used(self):
        if len(self.instances) == 0:
            return 0
        last = self.instances[-1]
        return last.pin_start + last.pin_count

    # everything that goes after the prototype top module
    @property
    def wiring(self):
        return "".join(f.text for f in self.fragments) + END_OF_WIRING

    # one include per instance, in instance order. aliases of the same module
    # show up once per instance.
    def includes_manifest(self):
        return "".join(include_line(i.descriptor.include_name+".v")
            for i in self.instances)

    # the complete includes file: the fixed sources, then every peripheral
    # source once, sorted
    def includes_file(self):
        peripheral_lines = sorted(set(self.includes_manifest().splitlines(True)))
        return "".join(include_line(name) for name in BASE_INCLUDES) + \
            "".join(peripheral_lines)

def build_chain(header_lines, tokens, rom=None):
    if rom is None:
        rom = ROMImage()

    header_lines = list(header_lines)
    if len(header_lines) < HEADER_LINES:
        raise NotEnoughHeaderStrings(len(header_lines), HEADER_LINES)
    for line in header_lines[:HEADER_LINES]:
        rom.append_header_line(line)

    instances = []
    fragments = []
    address = 0 # first peripheral is at address 0
    pin = 0 # pins are numbered from 0
    for token in tokens:
        if token.startswith(COMMENT):
            log.debug("skipping comment %r", token)
            continue

        descriptor = resolve(token)
        fragment = descriptor.emit(address, pin)
        instances.append(Instance(address=address, pin_start=pin,
            pin_count=fragment.pin_count, descriptor=descriptor))
        fragments.append(fragment)
        rom.append_driver_id(descriptor.driver_id)
        log.debug("slot %02d: %s (%s) %s", address, descriptor.type_name,
            descriptor.module_name, pin_range(pin, fragment.pin_count))

        pin = fragment.pin_end
        address += 1

    return Chain(instances, fragments, rom)
