import threading
from types import MappingProxyType


class OracleRegistry:
    """
    Oracle address -> assigned indices.

    Writers copy the current table, modify the copy and swap it in under a
    lock. Readers grab whatever table is current without locking, so a
    matching pass always sees one consistent snapshot.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._oracles = MappingProxyType({})

    def register(self, address: str, indices):
        indices = tuple(int(i) for i in indices)
        with self._lock:
            table = dict(self._oracles)
            table[address] = indices
            self._oracles = MappingProxyType(table)

    def matching_oracles(self, index: int) -> set:
        index = int(index)
        return {addr for addr, indices in self._oracles.items() if index in indices}

    def indices(self, address: str):
        return self._oracles.get(address)

    def snapshot(self):
        return self._oracles

    def __contains__(self, address) -> bool:
        return address in self._oracles

    def __len__(self) -> int:
        return len(self._oracles)
