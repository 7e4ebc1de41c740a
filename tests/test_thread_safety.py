"""Thread safety tests for streamini.

Decoders are single-use and hold all state on the instance, and
ReaderConfig is immutable, so one Reader and one config may be shared by
any number of threads. These tests use real threads to catch interference.
"""

from concurrent.futures import ThreadPoolExecutor

from streamini import KeyCase, Reader, ReaderConfig, loads, reader_config_context


def document(n: int) -> str:
    return f'[thread "{n}"]\nid = {n}\nname = "worker {n}"\nflag\n' * 20


class TestConcurrentDecoding:
    """Concurrent decodes never see each other's state."""

    def test_shared_reader(self) -> None:
        reader = Reader(ReaderConfig(separator=":", casing=KeyCase.UPPER))

        def decode(n: int) -> dict[str, list[str]]:
            out: dict[str, list[str]] = {}
            for key, value in reader.iter_pairs(document(n)):
                out.setdefault(key, []).append(value)
            return out

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(decode, range(64)))

        for n, out in enumerate(results):
            assert out == {
                f"THREAD:{n}:ID": [str(n)] * 20,
                f"THREAD:{n}:NAME": [f"worker {n}"] * 20,
                f"THREAD:{n}:FLAG": ["1"] * 20,
            }

    def test_context_config_per_thread(self) -> None:
        """reader_config_context inside a worker affects only that worker."""

        def decode(n: int) -> dict[str, list[str]]:
            separator = "/" if n % 2 else ":"
            with reader_config_context(ReaderConfig(separator=separator)):
                return dict(loads(f"[s]\nk{n} = {n}"))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(decode, range(64)))

        for n, out in enumerate(results):
            separator = "/" if n % 2 else ":"
            assert out == {f"s{separator}k{n}": [str(n)]}
