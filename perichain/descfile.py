# reading the description file ("perilist"). the first 8 lines are copied into
# the enumerator ROM byte for byte, so they can say whatever the build wants
# (board name, version, date, ...) in whatever encoding. after them comes the
# list of peripherals, one per bus slot, separated by any whitespace. a word
# starting with # is skipped, but only that word, so comments have to be single
# words like "#servo4".

from collections import namedtuple

from .errors import NotEnoughHeaderStrings

HEADER_LINES = 8

Description = namedtuple("Description", [
    "header_lines", # the ROM header strings as bytes, line terminators stripped
    "tokens", # everything after the header, split on whitespace
])

# only a trailing "\n" or "\r\n" ends a line. a lone "\r" is header content.
def _strip_line_end(line):
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line

# f must be opened in binary mode
def read_description(f, header_lines=HEADER_LINES):
    header = []
    for _ in range(header_lines):
        line = f.readline()
        if line == b"": # end of file
            raise NotEnoughHeaderStrings(len(header), header_lines)
        header.append(_strip_line_end(line))

    # peripheral names are plain ascii. latin-1 maps every byte, so anything
    # else just fails to resolve.
    tokens = [t.decode("latin-1") for t in f.read().split()]
    return Description(header_lines=header, tokens=tokens)

def load_description(path, header_lines=HEADER_LINES):
    with open(path, "rb") as f:
        return read_description(f, header_lines=header_lines)
