class HuffmanNode:
    """
    A node of the Huffman tree.

    A leaf carries a byte value in ``symbol``. An internal node has
    ``symbol`` set to None and owns its ``left`` and ``right`` children; its
    frequency is the sum of theirs. The synthetic root built for single-symbol
    input is internal with only a left child.
    """

    __slots__ = ("symbol", "freq", "left", "right")

    def __init__(self, symbol=None, freq=0, left=None, right=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.symbol is not None

    def child(self, bit: int):
        return self.right if bit else self.left

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol={self.symbol}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"
