# generate the peripheral wiring, includes and enumerator ROM for a build from
# its description file. the wiring is meant to be appended to the prototype
# top module to make main.v:
#
#    python3 -m perichain.host.build --protomain protomain -o main.v perilist

import argparse
import logging
import sys

from ..chain import build_chain
from ..descfile import load_description
from ..errors import ChainError, ListingOverflow
from ..gateware.sysdefs import render_header
from ..log import setup_logging
from ..registry import REGISTRY
from ..rom import INIT_RECORDS, RECORD_BYTES, ROM_CAPACITY, format_listing

log = logging.getLogger(__name__)

def make_parser():
    parser = argparse.ArgumentParser(prog="perichain.host.build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description='Build the peripheral chain for an FPGA image.\n\n'
        'The description file starts with 8 header lines which are copied into\n'
        'the enumerator ROM, followed by the peripherals in bus slot order.\n'
        'Words starting with \'#\' are skipped.')
    parser.add_argument('perilist', type=str, nargs='?',
        help='Path to the description file.')

    parser.add_argument('-o', '--main', type=str, default=None,
        help='Write the wiring to this file instead of stdout.')
    parser.add_argument('--protomain', type=str, default=None,
        help='Prototype top module to copy in front of the wiring.')
    parser.add_argument('--includes-tmp', type=str, default='includes.tmp',
        help='Where to write the list of peripheral includes, one per '
        'peripheral (default: includes.tmp).')
    parser.add_argument('--includes', type=str, default=None,
        help='Also write the complete includes file: the base sources '
        'followed by each peripheral source once.')
    parser.add_argument('--enumerator', type=str, default='enumerator.lst',
        help='Where to write the enumerator ROM initialization records '
        '(default: enumerator.lst).')
    parser.add_argument('--sysdefs', type=str, default=None,
        help='Also write the system definitions header here.')
    parser.add_argument('--init-records', type=int, default=INIT_RECORDS,
        metavar='N', help='Number of 32 byte initialization records to write '
        '(default: {}). Packed strings past the last record are an '
        'error.'.format(INIT_RECORDS))

    parser.add_argument('-l', '--list', action='store_true',
        help='List the known peripherals and exit.')
    parser.add_argument('--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('-q', '--quiet', action='store_true',
        help='Only print warnings and errors.')
    return parser

def list_peripherals(out):
    for d in REGISTRY:
        out.write("{:<12}{:<12}{:<12}{} pins\n".format(
            d.type_name, d.module_name, d.driver_id, d.pin_count))

def _write_text(path, text):
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)

def run_build(args, stdout=None):
    if stdout is None:
        stdout = sys.stdout

    # read everything first so a bad input never leaves half the outputs
    # behind
    desc = load_description(args.perilist)
    protomain = ""
    if args.protomain is not None:
        with open(args.protomain, "r", encoding="utf-8") as f:
            protomain = f.read()

    chain = build_chain(desc.header_lines, desc.tokens)
    listing = format_listing(chain.rom.image(), records=args.init_records)

    # everything is known good, write it all out
    if args.main is None:
        stdout.write(protomain + chain.wiring)
    else:
        _write_text(args.main, protomain + chain.wiring)
    _write_text(args.includes_tmp, chain.includes_manifest())
    if args.includes is not None:
        _write_text(args.includes, chain.includes_file())
    _write_text(args.enumerator, listing)
    if args.sysdefs is not None:
        _write_text(args.sysdefs, render_header())

    log.info("%d peripherals, %d pins, enumerator ROM %d/%d bytes "
        "(CRC 0x%04X)", len(chain.instances), chain.pins_used,
        len(chain.rom), chain.rom.capacity, chain.rom.crc())
    return chain

def main(argv=None, stdout=None):
    parser = make_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, quiet=args.quiet)

    if args.list:
        list_peripherals(stdout if stdout is not None else sys.stdout)
        return 0
    if args.perilist is None:
        parser.error("a description file is required")
    if args.init_records < 1:
        parser.error("--init-records must be at least 1")

    try:
        run_build(args, stdout=stdout)
    except ListingOverflow as e:
        log.error("FATAL: %s: %s", parser.prog, e)
        log.error("the whole ROM fits in --init-records %d",
            ROM_CAPACITY//RECORD_BYTES)
        return 1
    except (ChainError, OSError) as e:
        log.error("FATAL: %s: %s", parser.prog, e)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
