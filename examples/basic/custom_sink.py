"""Stream pairs into your own sink: keep only the last value of each key."""

from streamini import KeyCase, Reader, ReaderConfig


class LastValue(dict):
    def add(self, key: str, value: str) -> None:
        self[key] = value


reader = Reader(ReaderConfig(separator=":", casing=KeyCase.UPPER))
sink = LastValue()
reader.read("[log]\nlevel = info\nlevel = debug ; later lines win\n", sink)
print(sink)  # {'LOG:LEVEL': 'debug'}
