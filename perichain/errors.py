# everything that can go wrong while building a chain. all of them are fatal
# and nothing gets written out.

class ChainError(Exception): pass

class UnknownPeripheral(ChainError):
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return "UnknownPeripheral({!r})".format(self.name)

    def __str__(self):
        return "Unknown peripheral: {}".format(self.name)

class NotEnoughHeaderStrings(ChainError):
    def __init__(self, found, needed):
        self.found = found
        self.needed = needed

    def __repr__(self):
        return "NotEnoughHeaderStrings(found={}, needed={})".format(
            self.found, self.needed)

    def __str__(self):
        return "Not enough header strings: found {} but need {}".format(
            self.found, self.needed)

class ROMOverflow(ChainError):
    def __init__(self, length, capacity):
        self.length = length
        self.capacity = capacity

    def __repr__(self):
        return "ROMOverflow(length={}, capacity={})".format(
            self.length, self.capacity)

    def __str__(self):
        return "Enumerator ROM overflow: {} bytes do not fit in {}".format(
            self.length, self.capacity)

# the ROM itself is fine but the listing has too few records to hold it
class ListingOverflow(ChainError):
    def __init__(self, length, records, record_bytes):
        self.length = length
        self.records = records
        self.record_bytes = record_bytes

    def __repr__(self):
        return "ListingOverflow(length={}, records={}, record_bytes={})".format(
            self.length, self.records, self.record_bytes)

    def __str__(self):
        return ("Enumerator ROM data runs to {} bytes but {} init records only "
            "hold {}; write more records (at least {})").format(self.length,
            self.records, self.records*self.record_bytes,
            (self.length+self.record_bytes-1)//self.record_bytes)
