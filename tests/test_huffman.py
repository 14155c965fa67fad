import random

import pytest

import huffman as huff


def _internal_nodes(root):
    stack = [root]
    while stack:
        node = stack.pop()
        if not node.is_leaf:
            yield node
            stack.extend((node.left, node.right))


def test_frequency_table_counts_and_first_appearance_order():
    ft = huff.frequency_table("abracadabra")
    assert ft == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert list(ft) == ["a", "b", "r", "c", "d"]


def test_frequency_table_empty():
    assert huff.frequency_table("") == {}


def test_build_tree_rejects_empty_table():
    with pytest.raises(huff.EmptyInputError):
        huff.build_huffman_tree({})


def test_build_tree_rejects_zero_count():
    with pytest.raises(huff.HuffmanError):
        huff.build_huffman_tree({"a": 0, "b": 1})


def test_smallest_node_becomes_right_child():
    root = huff.build_huffman_tree({"x": 3, "y": 1})
    assert root.frequency == 4
    assert root.right.symbol == "y"
    assert root.left.symbol == "x"


def test_abracadabra_tree_shape_and_bits():
    bits, root = huff.encode("abracadabra")
    codes = huff.generate_huffman_codes(root)
    assert codes == {"a": "1", "r": "000", "b": "001", "d": "010", "c": "011"}
    assert bits == "10010001011101010010001"

    # c and d are merged first
    first_merge = root.left.right
    assert first_merge.frequency == 2
    assert {first_merge.left.symbol, first_merge.right.symbol} == {"c", "d"}

    ft = huff.frequency_table("abracadabra")
    assert len(bits) == huff.encoded_length(ft, codes) == 23
    assert huff.decode(bits, root) == "abracadabra"


def test_count_conservation_and_leaf_correspondence():
    text = "the quick brown fox jumps over the lazy dog, again and again"
    root = huff.build_huffman_tree(huff.frequency_table(text))
    for node in _internal_nodes(root):
        assert node.symbol is None
        assert node.frequency == node.left.frequency + node.right.frequency
    assert root.frequency == len(text)
    leaves = {leaf.symbol: leaf.frequency for leaf in huff.iter_leaves(root)}
    assert leaves == huff.frequency_table(text)


def test_codes_are_prefix_free():
    text = "mississippi river banks"
    codes = huff.generate_huffman_codes(huff.build_huffman_tree(huff.frequency_table(text)))
    values = list(codes.values())
    assert len(codes) == len(set(text))
    for i, a in enumerate(values):
        assert a
        for j, b in enumerate(values):
            if i != j:
                assert not b.startswith(a)


def test_single_symbol_input():
    bits, root = huff.encode("aaaa")
    assert root.is_leaf
    assert (root.symbol, root.frequency) == ("a", 4)
    assert huff.generate_huffman_codes(root) == {"a": ""}
    assert bits == ""
    assert huff.decode(bits, root) == "aaaa"


def test_single_symbol_tree_rejects_bits():
    _, root = huff.encode("zzz")
    with pytest.raises(huff.MalformedStreamError):
        huff.decode("0", root)


def test_empty_input_uses_no_tree_sentinel():
    assert huff.encode("") == ("", None)
    assert huff.decode("", None) == ""
    assert huff.generate_huffman_codes(None) == {}
    with pytest.raises(huff.MalformedStreamError):
        huff.decode("01", None)


def test_round_trip_random_texts():
    rng = random.Random(7)
    for n in (1, 2, 3, 17, 500):
        text = "".join(rng.choice("abcdefgh \n") for _ in range(n))
        bits, root = huff.encode(text)
        assert huff.decode(bits, root) == text


def test_round_trip_unicode():
    text = "naïve café, 東京 東京 ✓"
    bits, root = huff.encode(text)
    assert set(bits) <= {"0", "1"}
    assert huff.decode(bits, root) == text


def test_encode_is_deterministic():
    text = "she sells sea shells by the sea shore"
    bits1, root1 = huff.encode(text)
    bits2, root2 = huff.encode(text)
    assert bits1 == bits2
    assert huff.format_tree(root1) == huff.format_tree(root2)


def test_truncated_stream_raises():
    bits, root = huff.encode("abracadabra")
    with pytest.raises(huff.MalformedStreamError):
        huff.decode(bits[:-2], root)


def test_invalid_bit_raises():
    bits, root = huff.encode("abracadabra")
    with pytest.raises(huff.MalformedStreamError):
        huff.decode(bits[:3] + "2" + bits[4:], root)


def test_empty_bits_with_multi_symbol_tree_raises():
    _, root = huff.encode("ab")
    with pytest.raises(huff.MalformedStreamError):
        huff.decode("", root)


def test_unmapped_symbol_raises_lookup_error():
    codes = huff.generate_huffman_codes(huff.build_huffman_tree({"a": 1, "b": 1}))
    with pytest.raises(LookupError):
        huff.huffman_encode("abc", codes)


def test_decode_generic_symbols():
    data = [10, 20, 10, 30, 10]
    root = huff.build_huffman_tree(huff.frequency_table(data))
    bits = huff.huffman_encode(data, huff.generate_huffman_codes(root))
    assert huff.huffman_decode(bits, root) == data


def test_code_lengths_and_format_tree():
    _, root = huff.encode("aab")
    codes = huff.generate_huffman_codes(root)
    assert huff.code_lengths(codes) == {"a": 1, "b": 1}
    assert huff.format_tree(root).splitlines() == [
        "* (3)",
        "  0 'a' (2)",
        "  1 'b' (1)",
    ]
    assert huff.format_tree(None) == "<empty>"
    assert repr(root) == "Internal(3, Leaf('a', 2), Leaf('b', 1))"


def test_final_bit_leading_off_the_tree_raises():
    root = huff.HuffmanNode(None, 3, left=huff.HuffmanNode("a", 3))
    with pytest.raises(huff.MalformedStreamError, match="leads off the tree"):
        huff.decode("1", root)


def test_mid_stream_bit_leading_off_the_tree_raises():
    inner = huff.HuffmanNode(None, 2, left=huff.HuffmanNode("b", 2))
    root = huff.HuffmanNode(None, 5, left=huff.HuffmanNode("a", 3), right=inner)
    with pytest.raises(huff.MalformedStreamError, match="position 1"):
        huff.decode("110", root)
