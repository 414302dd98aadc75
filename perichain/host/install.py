# send a finished FPGA image to the board. the board loads whatever arrives on
# its serial port: the description file (so the build can be identified even
# without the enumerator ROM) followed by the bitstream.
#
#    python3 -m perichain.host.install perilist temp.bin /dev/ttyUSB0

import argparse
import logging
import sys

import serial

import crcmod.predefined
crc_16_kermit = crcmod.predefined.mkPredefinedCrcFun("kermit")

from ..log import setup_logging

log = logging.getLogger(__name__)

CHUNK_SIZE = 4096

class InstallError(Exception): pass

def make_image(perilist_path, bitstream_path):
    with open(perilist_path, "rb") as f:
        image = f.read()
    with open(bitstream_path, "rb") as f:
        bitstream = f.read()
    if len(bitstream) == 0:
        raise InstallError("bitstream {} is empty".format(bitstream_path))
    return image + bitstream

# write the image to an open port, raw and unchanged
def send_image(port, image, chunk_size=CHUNK_SIZE):
    for start in range(0, len(image), chunk_size):
        chunk = image[start:start+chunk_size]
        written = port.write(chunk)
        if written is not None and written != len(chunk):
            raise InstallError("short write at byte {}".format(start+written))
    port.flush()
    return len(image)

def do_install(port_name, image, baudrate=115200):
    log.info("Connecting to %s...", port_name)
    with serial.Serial(port=port_name, baudrate=baudrate, timeout=1) as port:
        log.info("Sending %d bytes (CRC 0x%04X)...", len(image),
            crc_16_kermit(image))
        send_image(port, image)
    log.info("Success!")

def make_parser():
    parser = argparse.ArgumentParser(prog="perichain.host.install",
        description='Send a built FPGA image to the board.')
    parser.add_argument('perilist', type=str,
        help='Path to the description file the image was built from.')
    parser.add_argument('bitstream', type=str,
        help='Path to the binary bitstream.')
    parser.add_argument('port', type=str, nargs='?',
        help='Name of the serial port the board is attached to.')
    parser.add_argument('-b', '--baudrate', type=int, default=115200,
        help='Serial port baud rate (default: 115200).')
    parser.add_argument('-o', '--output', type=str, default=None,
        help='Also save the combined image to this file.')
    parser.add_argument('--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser

def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    if args.port is None and args.output is None:
        parser.error("nothing to do: give a serial port, --output, or both")

    try:
        image = make_image(args.perilist, args.bitstream)
        if args.output is not None:
            with open(args.output, "wb") as f:
                f.write(image)
            log.info("Wrote %d bytes to %s", len(image), args.output)
        if args.port is not None:
            do_install(args.port, image, baudrate=args.baudrate)
    except (InstallError, serial.SerialException, OSError) as e:
        log.error("FATAL: %s: %s", parser.prog, e)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
