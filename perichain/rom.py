# the enumerator ROM: a block of NUL terminated strings the host reads back to
# find out what got built into the FPGA. the first 8 strings are the header
# lines from the description file, then there's one host driver name per bus
# slot, in slot order.

# the image goes into the FPGA as block RAM initialization records. each record
# holds 32 bytes as one 256 bit hex literal, most significant (highest
# addressed) byte first, so a ROM starting with "DPI" has record 0 reading
#
#    .INIT_00(256'h...00495044),

import re

import numpy as np

import crcmod.predefined
crc_16_kermit = crcmod.predefined.mkPredefinedCrcFun("kermit")

from .errors import ListingOverflow, ROMOverflow

ROM_CAPACITY = 2048 # bytes
INIT_RECORDS = 16
RECORD_BYTES = 32

class ROMImage:
    def __init__(self, capacity=ROM_CAPACITY):
        self.capacity = capacity
        self._data = bytearray()

    def __len__(self):
        return len(self._data)

    def _append(self, value):
        if isinstance(value, str):
            value = value.encode("utf-8")
        self._data += value
        self._data.append(0)
        # an image that exactly fills the ROM is fine, one byte more is not
        if len(self._data) > self.capacity:
            raise ROMOverflow(len(self._data), self.capacity)

    def append_header_line(self, line):
        self._append(line)

    def append_driver_id(self, driver_id):
        self._append(driver_id)

    # the strings written so far, without the zero fill
    @property
    def data(self):
        return bytes(self._data)

    # the full ROM contents, zero filled up to the capacity
    def image(self):
        if len(self._data) > self.capacity:
            raise ROMOverflow(len(self._data), self.capacity)
        return bytes(self._data) + bytes(self.capacity - len(self._data))

    def crc(self):
        return crc_16_kermit(self.image())

# render the image as block RAM initialization records
def format_listing(image, records=INIT_RECORDS):
    span = records*RECORD_BYTES
    data = np.frombuffer(bytes(image), dtype=np.uint8)

    # the records can only hold so much. anything past them would silently
    # never make it into the FPGA.
    used = np.flatnonzero(data)
    if len(used) > 0 and used[-1] >= span:
        raise ListingOverflow(int(used[-1])+1, records, RECORD_BYTES)

    if len(data) < span:
        data = np.concatenate((data, np.zeros(span-len(data), dtype=np.uint8)))
    # reverse each record so the last byte comes first
    chunks = data[:span].reshape(records, RECORD_BYTES)[:, ::-1]

    lines = []
    for ri, chunk in enumerate(chunks):
        lines.append("    .INIT_{:02X}(256'h{})".format(
            ri, chunk.tobytes().hex()))
    return ",\n".join(lines) + "\n"

_record_re = re.compile(
    r"\.INIT_([0-9A-Fa-f]{2})\(256'h([0-9A-Fa-f]{64})\)")

# get the bytes back out of a listing made by format_listing
def parse_listing(text):
    records = _record_re.findall(text)
    if len(records) == 0:
        raise ValueError("no INIT records found")

    chunks = []
    for ri, (index, hex_data) in enumerate(records):
        if int(index, 16) != ri:
            raise ValueError("expected record INIT_{:02X} but found INIT_{}".format(
                ri, index))
        chunks.append(np.frombuffer(bytes.fromhex(hex_data), dtype=np.uint8))

    return np.stack(chunks)[:, ::-1].tobytes()
