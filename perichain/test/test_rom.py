# test packing the enumerator ROM and writing it out as INIT records

import unittest

from ..errors import ListingOverflow, ROMOverflow
from ..rom import (ROMImage, ROM_CAPACITY, INIT_RECORDS, RECORD_BYTES,
    crc_16_kermit, format_listing, parse_listing)

HEADER = ["DPI", "board: baseboard4", "", "version 1", "", "", "", "last"]

def packed(driver_ids=("enumerator", "servo4", "null")):
    rom = ROMImage()
    for line in HEADER:
        rom.append_header_line(line)
    for driver_id in driver_ids:
        rom.append_driver_id(driver_id)
    return rom

class TestROMImage(unittest.TestCase):
    def test_packing(self):
        rom = packed()
        expected = b"".join(s.encode()+b"\0" for s in HEADER)
        expected += b"enumerator\0servo4\0null\0"
        self.assertEqual(rom.data, expected)
        self.assertEqual(len(rom), len(expected))

    def test_image_zero_filled(self):
        rom = packed()
        image = rom.image()
        self.assertEqual(len(image), ROM_CAPACITY)
        self.assertEqual(image[:len(rom)], rom.data)
        self.assertEqual(image[len(rom):], bytes(ROM_CAPACITY-len(rom)))
        self.assertEqual(rom.crc(), crc_16_kermit(image))

    def test_empty_strings(self):
        rom = ROMImage()
        rom.append_header_line("")
        rom.append_header_line("")
        self.assertEqual(rom.data, b"\0\0")

    def test_exactly_full(self):
        rom = ROMImage(capacity=16)
        rom.append_header_line("x"*10) # 11 bytes
        rom.append_driver_id("null") # 16 bytes
        self.assertEqual(rom.image(), b"x"*10 + b"\0null\0")

    def test_overflow(self):
        rom = ROMImage(capacity=16)
        rom.append_header_line("x"*10)
        with self.assertRaises(ROMOverflow) as cm:
            rom.append_driver_id("servo")
        self.assertEqual(cm.exception.length, 17)
        self.assertEqual(cm.exception.capacity, 16)

    def test_header_overflow(self):
        rom = ROMImage(capacity=16)
        with self.assertRaises(ROMOverflow):
            rom.append_header_line("y"*16)

class TestListing(unittest.TestCase):
    def test_format(self):
        listing = format_listing(packed().image())
        lines = listing.splitlines()
        self.assertEqual(len(lines), INIT_RECORDS)
        for ri, line in enumerate(lines):
            end = ")" if ri == INIT_RECORDS-1 else "),"
            self.assertTrue(line.startswith("    .INIT_{:02X}(256'h".format(ri)))
            self.assertTrue(line.endswith(end))
            hex_data = line[len("    .INIT_00(256'h"):-len(end)]
            self.assertEqual(len(hex_data), 2*RECORD_BYTES)
        self.assertTrue(listing.endswith(")\n"))

    def test_byte_order(self):
        lines = format_listing(packed().image()).splitlines()
        # "DPI\0" is the start of record 0, so it's the end of the literal
        self.assertTrue(lines[0].endswith("00495044),"))
        image = packed().image()
        for ri, line in enumerate(lines):
            hex_data = line.split("'h")[1][:2*RECORD_BYTES]
            chunk = image[ri*RECORD_BYTES:(ri+1)*RECORD_BYTES]
            self.assertEqual(bytes.fromhex(hex_data)[::-1], chunk)

    def test_blank(self):
        lines = format_listing(bytes(ROM_CAPACITY)).splitlines()
        self.assertEqual(lines[3], "    .INIT_03(256'h{}),".format("0"*64))

    def test_lowercase_hex(self):
        rom = ROMImage()
        rom.append_driver_id("\xff")
        line = format_listing(rom.image()).splitlines()[0]
        self.assertTrue(line.endswith("00bfc3),"))

    def test_round_trip(self):
        image = packed().image()
        self.assertEqual(parse_listing(format_listing(image)),
            image[:INIT_RECORDS*RECORD_BYTES])
        # with enough records the whole ROM comes back
        records = ROM_CAPACITY//RECORD_BYTES
        self.assertEqual(parse_listing(format_listing(image, records=records)),
            image)

    def test_round_trip_full(self):
        rom = ROMImage()
        for i in range(ROM_CAPACITY//8):
            rom.append_driver_id("d{:06d}".format(i))
        self.assertEqual(len(rom), ROM_CAPACITY)
        image = rom.image()
        listing = format_listing(image, records=ROM_CAPACITY//RECORD_BYTES)
        self.assertEqual(parse_listing(listing), image)

    def test_data_past_records(self):
        rom = ROMImage()
        rom.append_header_line("z"*(INIT_RECORDS*RECORD_BYTES+1))
        with self.assertRaises(ListingOverflow) as cm:
            format_listing(rom.image())
        self.assertEqual(cm.exception.length, INIT_RECORDS*RECORD_BYTES+1)
        self.assertEqual(cm.exception.records, INIT_RECORDS)
        # the message is about the records, not the ROM
        self.assertIn("{} init records".format(INIT_RECORDS), str(cm.exception))
        self.assertIn("at least {}".format(INIT_RECORDS+1), str(cm.exception))
        self.assertNotIsInstance(cm.exception, ROMOverflow)

    def test_parse_errors(self):
        with self.assertRaises(ValueError):
            parse_listing("nothing here")
        lines = format_listing(bytes(ROM_CAPACITY)).splitlines()
        with self.assertRaises(ValueError):
            parse_listing("\n".join([lines[1], lines[0]]))

if __name__ == "__main__":
    unittest.main()
