"""
Bit-packed ANF example using pyanf.

Demonstrates:
- Packing a Boolean truth table into an int or uint64 words
- Computing the ANF via pyanf.transform_packed / pyanf.transform_words
- Verifying against pyanf.compute_anf (unpacked)
"""

import numpy as np
import pyanf


def main():
    # Small example: NOT x1 packs to 0b0011, its ANF 1 ^ x1 is 0b0101
    truth = np.array([1, 1, 0, 0], dtype=np.uint8)
    packed = pyanf.pack_bits(truth)

    anf_ref = pyanf.compute_anf(truth)
    anf_pk = pyanf.transform_packed(packed, n=2)

    print("Truth:", truth.tolist())
    print("Packed (bin):", bin(packed))
    print("ANF (ref):   ", anf_ref.astype(int).tolist())
    print("ANF (packed):", bin(anf_pk))
    assert anf_pk == pyanf.pack_bits(anf_ref)
    print("✓ Match for n=2")

    # Fixed-width NumPy scalars: the width comes from the dtype
    rule = np.uint8(30)
    print("Rule 30 ANF:", int(pyanf.transform_packed(rule, n=3)))
    try:
        pyanf.transform_packed(np.uint8(0), n=4)
    except pyanf.WidthTooSmallError as e:
        print("Rejected:", e)

    # Larger example, packed across uint64 words
    n = 12
    rng = np.random.default_rng(42)
    truth = rng.integers(0, 2, size=1 << n, dtype=np.uint8)
    words = pyanf.pack_words(truth)

    anf_ref = pyanf.compute_anf(truth)
    pyanf.transform_words(words, n=n)
    assert np.array_equal(pyanf.unpack_words(words, n), anf_ref)
    print(f"✓ Match for n={n} ({words.size} uint64 words)")


if __name__ == "__main__":
    main()
