import heapq


class HuffmanError(ValueError):
    pass

class EmptyInputError(HuffmanError): # no symbols to build a tree from
    pass

class MalformedStreamError(HuffmanError): # bits that do not walk the tree to a leaf
    pass


class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol, frequency, left=None, right=None):
        self.symbol = symbol    # None for internal nodes
        self.frequency = frequency
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other):
        return self.frequency < other.frequency

    def __repr__(self):
        if self.is_leaf:
            return f"Leaf({self.symbol!r}, {self.frequency})"
        return f"Internal({self.frequency}, {self.left!r}, {self.right!r})"


def frequency_table(data) -> dict: # data: any sequence of hashable symbols
    ft = {}
    for symbol in data:
        ft[symbol] = ft.get(symbol, 0) + 1
    return ft # keys in order of first appearance


def build_huffman_tree(frequency_table): # frequency_table: dict of symbol -> frequency
    """
    Greedy merge of the two lowest-frequency nodes until one root remains.

    Equal frequencies are popped in the order the nodes entered the queue:
    leaves in frequency table order, then merged nodes as they are created.
    The smallest node becomes the RIGHT child, the second smallest the LEFT.
    """
    if not frequency_table:
        raise EmptyInputError("cannot build a Huffman tree from an empty frequency table")

    priority_queue = []
    for order, (symbol, frequency) in enumerate(frequency_table.items()):
        if frequency < 1:
            raise HuffmanError(f"frequency for {symbol!r} must be >= 1, got {frequency}")
        priority_queue.append((frequency, order, HuffmanNode(symbol, frequency)))
    heapq.heapify(priority_queue)
    order = len(priority_queue)

    # Build the tree
    while len(priority_queue) > 1:
        _, _, smallest = heapq.heappop(priority_queue)
        _, _, second = heapq.heappop(priority_queue)
        merged_node = HuffmanNode(None, smallest.frequency + second.frequency, left=second, right=smallest)
        heapq.heappush(priority_queue, (merged_node.frequency, order, merged_node))
        order += 1

    return priority_queue[0][2] # root of the tree, a lone leaf for a single symbol


def generate_huffman_codes(root): # root: root of the Huffman tree
    codes = {}
    def generate_codes_helper(node, current_code): # recursive helper function to traverse the tree and generate codes
        if node is None:
            return

        # Leaf node -> assign code ('' when the root itself is a leaf)
        if node.is_leaf:
            codes[node.symbol] = current_code
            return

        generate_codes_helper(node.left, current_code + '0')
        generate_codes_helper(node.right, current_code + '1')

    generate_codes_helper(root, '')
    return codes # return the mapping of symbols to their corresponding Huffman codes


def huffman_encode(data, code_map: dict) -> str: # data: symbols to encode, code_map: dict of symbol -> Huffman code
    out = []
    for symbol in data:
        code = code_map.get(symbol)
        if code is None:
            raise LookupError(f"symbol {symbol!r} has no entry in the code table")
        out.append(code)
    return ''.join(out)


def huffman_decode(bitstring: str, root) -> list: # bitstring: the encoded string of '0's and '1's, root: root of the Huffman tree
    if root is None:
        if bitstring:
            raise MalformedStreamError("got encoded bits but no tree to decode them with")
        return []

    if root.is_leaf:
        # Zero-length code: the leaf count is the only record of the text length
        if bitstring:
            raise MalformedStreamError(f"single-symbol tree cannot decode {len(bitstring)} bits")
        return [root.symbol] * root.frequency

    decoded = []
    node = root
    cursor = 0
    while cursor < len(bitstring):
        if node.is_leaf: # reached a leaf before reading the bit, restart at the root for the same bit
            decoded.append(node.symbol)
            node = root
            continue

        bit = bitstring[cursor]
        if bit == '0':
            node = node.left
        elif bit == '1':
            node = node.right
        else:
            raise MalformedStreamError(f"invalid bit {bit!r} at position {cursor}")
        if node is None:
            raise MalformedStreamError(f"bit {bit!r} at position {cursor} leads off the tree")
        cursor += 1

    # The last bit was a descent step, read its destination directly
    if not node.is_leaf:
        raise MalformedStreamError("bit sequence ends in the middle of a code")
    decoded.append(node.symbol)

    return decoded


def encode(text):
    """
    Encode text into a bitstring together with the tree needed to decode it.

    Empty text gives ("", None).
    """
    ft = frequency_table(text)
    if not ft:
        return '', None
    root = build_huffman_tree(ft)
    code_map = generate_huffman_codes(root)
    return huffman_encode(text, code_map), root


def decode(bitstring: str, root) -> str:
    return ''.join(huffman_decode(bitstring, root))


# Inspection helpers

def iter_leaves(root):
    """Yield the leaves of the tree from left to right."""
    stack = [root] if root is not None else []
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)

def code_lengths(code_map: dict) -> dict:
    return {symbol: len(code) for symbol, code in code_map.items()}

def encoded_length(ft: dict, code_map: dict) -> int:
    return sum(count * len(code_map[symbol]) for symbol, count in ft.items())

def format_tree(root, indent: str = "  ") -> str:
    """
    Render a tree as indented text, one node per line.

    Each line shows the branch bit that leads to it, then the node:
        * (11)
          0 * (6)
          ...
          1 'a' (5)
    """
    if root is None:
        return "<empty>"

    lines = []
    def walk(node, depth, branch):
        label = f"{node.symbol!r} ({node.frequency})" if node.is_leaf else f"* ({node.frequency})"
        lines.append(f"{indent * depth}{branch}{label}")
        if not node.is_leaf:
            walk(node.left, depth + 1, "0 ")
            walk(node.right, depth + 1, "1 ")

    walk(root, 0, "")
    return "\n".join(lines)
