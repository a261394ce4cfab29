#!/usr/bin/env python3
import heapq
import io
from collections import deque
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .bitstream_utils import BitOrder, BitReader, BitWriter


class HuffmanError(ValueError):
    pass


class _HuffmanNode:
    __slots__ = ("index", "frequency", "symbol", "left", "right", "depth")

    def __init__(self, index: int, frequency: int, symbol: Optional[int] = None,
                 left: int = -1, right: int = -1) -> None:
        self.index = index
        self.frequency = frequency
        self.symbol = symbol
        self.left = left
        self.right = right
        self.depth = 0

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    @property
    def rank(self) -> int:
        return self.symbol if self.symbol is not None else -1

    def __lt__(self, other: "_HuffmanNode") -> bool:
        if self.frequency != other.frequency:
            return self.frequency < other.frequency
        # equal weight: merged nodes rank as symbol -1, remaining ties by arena index
        if self.rank != other.rank:
            return self.rank < other.rank
        return self.index < other.index


def build_code_lengths(freqs: Mapping[int, int]) -> List[Tuple[int, int]]:
    """
    Build a Huffman tree and return (length, symbol) pairs sorted by
    (length, symbol). Zero-weight symbols get no code; a lone symbol gets
    length 1.
    """
    arena: List[_HuffmanNode] = []
    for sym, f in sorted(freqs.items()):
        if f < 0:
            raise HuffmanError(f"Negative frequency for symbol {sym}: {f}")
        if f > 0:
            arena.append(_HuffmanNode(len(arena), f, symbol=sym))
    if not arena:
        raise HuffmanError("Frequency table has no symbols.")
    if len(arena) == 1:
        return [(1, arena[0].symbol)]

    heap = list(arena)
    heapq.heapify(heap)
    while len(heap) > 1:
        a = heapq.heappop(heap)
        b = heapq.heappop(heap)
        node = _HuffmanNode(len(arena), a.frequency + b.frequency, left=a.index, right=b.index)
        arena.append(node)
        heapq.heappush(heap, node)

    pairs: List[Tuple[int, int]] = []
    queue = deque([heap[0]])
    while queue:
        node = queue.popleft()
        if node.is_leaf:
            pairs.append((node.depth, node.symbol))
            continue
        for child in (arena[node.left], arena[node.right]):
            child.depth = node.depth + 1
            queue.append(child)
    pairs.sort()
    return pairs


def length_histogram(pairs: Iterable[Tuple[int, int]]) -> List[int]:
    population: List[int] = []
    for length, _ in pairs:
        while len(population) < length:
            population.append(0)
        population[length - 1] += 1
    return population


def limit_code_lengths(population: List[int], limit: int) -> List[int]:
    """
    Squeeze a length histogram so no code is longer than `limit`.

    Heuristic: each step trades two codes at the deepest length for one code
    one level up, and pushes one shorter code two levels down to keep the
    Kraft sum unchanged. The result is valid but not an optimal
    length-limited code.
    """
    population = list(population)
    if limit <= 0:
        return population
    while len(population) > limit:
        if population[-1] == 0:
            population.pop()
            continue
        if len(population) < 3:
            raise HuffmanError("Limit too small")
        key = len(population) - 3
        while population[key] == 0:
            if key == 0:
                raise HuffmanError("Limit too small")
            key -= 1
        population[-1] -= 2
        population[-2] += 1
        population[key + 1] += 2
        population[key] -= 1
    while population and population[-1] == 0:
        population.pop()
    return population


def distribute_symbols(pairs: List[Tuple[int, int]], population: List[int]) -> List[List[int]]:
    """Refill per-length symbol lists from sorted pairs and a (possibly limited) histogram."""
    remaining = list(population)
    if sum(remaining) != len(pairs):
        raise HuffmanError("Histogram does not match symbol count.")
    symbol_lists: List[List[int]] = []
    length = 1
    for _, sym in pairs:
        while remaining[length - 1] == 0:
            length += 1
        while len(symbol_lists) < length:
            symbol_lists.append([])
        symbol_lists[length - 1].append(sym)
        remaining[length - 1] -= 1
    return symbol_lists


def assign_canonical_codes(symbol_lists: List[List[int]]) -> Dict[int, Tuple[int, int]]:
    """symbol_lists[i] holds the symbols of length i + 1; returns sym -> (code, length)."""
    if not isinstance(symbol_lists, (list, tuple)):
        raise HuffmanError("Symbol lists must be a list of per-length lists.")
    for symbols in symbol_lists:
        if not isinstance(symbols, (list, tuple)) or not all(isinstance(s, int) for s in symbols):
            raise HuffmanError(f"Malformed length band: {symbols!r}")
    codes: Dict[int, Tuple[int, int]] = {}
    code = 0
    for i, symbols in enumerate(symbol_lists):
        length = i + 1
        for sym in sorted(symbols):
            if code >= (1 << length):
                raise HuffmanError(f"Over-subscribed code lengths at length {length}.")
            if sym in codes:
                raise HuffmanError(f"Duplicate symbol in code table: {sym}")
            codes[sym] = (code, length)
            code += 1
        code <<= 1
    return codes


class HuffmanCode:
    """
    Canonical Huffman code over integer symbols.

    Immutable once built; lookups and encode/decode only read the tables.
    """

    def __init__(self, symbol_lists: List[List[int]]) -> None:
        self._encode = assign_canonical_codes(symbol_lists)
        max_len = max((length for _, length in self._encode.values()), default=0)
        self._decode: List[Dict[int, int]] = [{} for _ in range(max_len)]
        for sym, (code, length) in self._encode.items():
            self._decode[length - 1][code] = sym

    @classmethod
    def from_frequencies(cls, freqs: Mapping[int, int], limit: int = 0) -> "HuffmanCode":
        pairs = build_code_lengths(freqs)
        population = length_histogram(pairs)
        if limit > 0 and len(population) > limit:
            population = limit_code_lengths(population, limit)
        return cls(distribute_symbols(pairs, population))

    @property
    def max_length(self) -> int:
        return len(self._decode)

    def __len__(self) -> int:
        return len(self._encode)

    def __contains__(self, symbol: int) -> bool:
        return symbol in self._encode

    def lookup(self, symbol: int) -> Optional[Tuple[int, int]]:
        return self._encode.get(symbol)

    def encode(self, symbol: int, writer: BitWriter) -> bool:
        entry = self._encode.get(symbol)
        if entry is None:
            return False
        code, length = entry
        writer.write(code, length)
        return True

    def lookup_code(self, code: int, length: int) -> Optional[int]:
        if length == 0 or length > len(self._decode):
            return None
        return self._decode[length - 1].get(code)

    def decode(self, reader: BitReader) -> Optional[int]:
        code = 0
        for length in range(1, len(self._decode) + 1):
            code = (code << 1) | reader.read(1)
            sym = self.lookup_code(code, length)
            if sym is not None:
                return sym
        return None

    def length_counts(self) -> List[int]:
        return [len(band) for band in self._decode]

    def ordered_symbols(self) -> List[List[int]]:
        return [sorted(band.values()) for band in self._decode]


def encode_symbols(symbols: Iterable[int], code: HuffmanCode,
                   order: BitOrder = BitOrder.MSB, fill: bool = False) -> bytes:
    out = io.BytesIO()
    writer = BitWriter(out, order)
    for sym in symbols:
        if not code.encode(sym, writer):
            raise HuffmanError(f"Symbol not in code table: {sym}")
    writer.flush(fill)
    return out.getvalue()


def decode_symbols(data: bytes, code: HuffmanCode, count: int,
                   order: BitOrder = BitOrder.MSB) -> List[int]:
    reader = BitReader(io.BytesIO(data), order)
    out: List[int] = []
    try:
        while len(out) < count:
            sym = code.decode(reader)
            if sym is None:
                raise HuffmanError("Invalid bitstream: no matching Huffman code.")
            out.append(sym)
    except EOFError:
        raise HuffmanError(f"Decoded {len(out)} symbols, expected {count}.") from None
    return out
