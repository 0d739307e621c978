from heapq import heappush, heappop, heapify
from collections import Counter
from itertools import count
from typing import Dict, Iterable, Tuple

from bitarray import bitarray

from .errors import CodeLengthError, InvalidTreeDescentError, MalformedContainerError
from .node import HuffmanNode

# The container stores every code length in a single unsigned byte.
MAX_CODE_LENGTH = 255


class HuffmanCompressor:
    """
    Builds Huffman trees and code maps for byte data and walks them back.

    Ties in the priority queue are broken by insertion order: leaves are
    pushed in ascending symbol order, merged nodes after them. The same
    input therefore always yields the same tree and the same codes.
    """

    def build_frequency_table(self, data: bytes) -> Dict[int, int]:
        """
        Counts how often every byte value occurs in the data.

        Parameters:
        data (bytes): The input bytes, possibly empty.

        Returns:
        Dict[int, int]: Byte value to occurrence count, sorted by byte value.
        """
        freq = Counter(data)
        return {symbol: freq[symbol] for symbol in sorted(freq)}

    def build_tree(self, freq: Dict[int, int]) -> HuffmanNode:
        """
        Builds the Huffman tree for a non-empty frequency table.

        With a single distinct symbol the leaf is hung under a synthetic root
        as its left child, so that its code is one bit long instead of empty.

        Parameters:
        freq (Dict[int, int]): Byte value to frequency. Must not be empty.

        Returns:
        HuffmanNode: The root of the tree.
        """
        if not freq:
            raise ValueError("Cannot build a Huffman tree from an empty frequency table")

        order = count()
        heap = [(weight, next(order), HuffmanNode(symbol, weight))
                for symbol, weight in sorted(freq.items())]
        heapify(heap)

        if len(heap) == 1:
            _, _, only = heappop(heap)
            return HuffmanNode(None, only.freq, left=only)

        while len(heap) > 1:
            low_freq, _, low = heappop(heap)
            high_freq, _, high = heappop(heap)
            merged = HuffmanNode(None, low_freq + high_freq, left=low, right=high)
            heappush(heap, (merged.freq, next(order), merged))

        return heap[0][2]

    def build_code_map(self, root: HuffmanNode) -> Dict[int, bitarray]:
        """
        Assigns a code to every leaf: 0 for a left edge, 1 for a right edge.

        Parameters:
        root (HuffmanNode): The tree root.

        Returns:
        Dict[int, bitarray]: Byte value to code, sorted by byte value.

        Raises:
        CodeLengthError: If a code does not fit into the header length field.
        """
        codes = {}
        # iterative DFS so a degenerate deep tree can't hit the recursion limit
        stack = [(root, bitarray(endian="big"))]
        while stack:
            node, prefix = stack.pop()
            if node.is_leaf():
                if not prefix:
                    prefix = bitarray("0", endian="big")
                if len(prefix) > MAX_CODE_LENGTH:
                    raise CodeLengthError(
                        f"Code for symbol {node.symbol} is {len(prefix)} bits long, "
                        f"the limit is {MAX_CODE_LENGTH}"
                    )
                codes[node.symbol] = prefix
                continue
            if node.right is not None:
                stack.append((node.right, prefix + bitarray("1", endian="big")))
            if node.left is not None:
                stack.append((node.left, prefix + bitarray("0", endian="big")))
        return {symbol: codes[symbol] for symbol in sorted(codes)}

    def rebuild_tree(self, entries: Iterable[Tuple[int, bitarray]]) -> HuffmanNode:
        """
        Rebuilds a tree from (symbol, code) pairs read out of a container
        header. Internal nodes are created on demand along each code path.

        Raises:
        MalformedContainerError: If a code is empty, or a code collides with
            another one (equal to it or a prefix of it).
        """
        root = HuffmanNode()
        for symbol, code in entries:
            if not code:
                raise MalformedContainerError(f"Symbol {symbol} has an empty code")
            node = root
            for bit in code:
                if node.is_leaf():
                    raise MalformedContainerError(
                        f"Code {code.to01()} for symbol {symbol} extends the code of symbol {node.symbol}"
                    )
                nxt = node.child(bit)
                if nxt is None:
                    nxt = HuffmanNode()
                    if bit:
                        node.right = nxt
                    else:
                        node.left = nxt
                node = nxt
            if node.is_leaf() or node.left is not None or node.right is not None:
                raise MalformedContainerError(
                    f"Code {code.to01()} for symbol {symbol} collides with another code"
                )
            node.symbol = symbol
        return root

    def decode_symbol(self, root: HuffmanNode, reader) -> int:
        """
        Descends from the root one bit at a time until a leaf is reached.

        Parameters:
        root (HuffmanNode): The reconstructed tree.
        reader (BitReader): Source of bits.

        Returns:
        int: The symbol of the reached leaf.

        Raises:
        InvalidTreeDescentError: If a bit points at a missing child.
        StreamExhaustedError: If the reader runs out of bits.
        """
        node = root
        depth = 0
        while not node.is_leaf():
            bit = reader.read_bit()
            depth += 1
            node = node.child(bit)
            if node is None:
                raise InvalidTreeDescentError(
                    f"No tree node for bit {bit} at depth {depth}"
                )
        return node.symbol
