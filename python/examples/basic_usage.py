"""
Basic usage examples for pyanf package.

This file demonstrates the main features of the pyanf library.
"""
import numpy as np
import pyanf


def monomials(coefficients):
    """Render ANF coefficients as an XOR of monomials, e.g. '1 ^ x0.x1'."""
    n = pyanf.log2(len(coefficients))
    terms = []
    for u, present in enumerate(coefficients):
        if not present:
            continue
        names = [f"x{k}" for k in range(n) if u >> k & 1]
        terms.append(".".join(names) if names else "1")
    return " ^ ".join(terms) if terms else "0"


print("=" * 70)
print("pyanf - Fast Algebraic Normal Form Transform for Python")
print("=" * 70)
print()

# ============================================================================
# Example 1: Basic in-place transform
# ============================================================================
print("Example 1: Basic in-place transform")
print("-" * 70)

# f(x1,x0): f(0,0)=1, f(0,1)=1, f(1,0)=0, f(1,1)=0
data = np.array([1, 1, 0, 0], dtype=bool)
print(f"Truth table:   {data.astype(int)}")

pyanf.transform_array(data)
print(f"ANF:           {data.astype(int)}  ->  f = {monomials(data)}")

# The transform is its own inverse
pyanf.transform_array(data)
print(f"After 2nd ANF: {data.astype(int)} (truth table again)")
print()

# ============================================================================
# Example 2: Out-of-place transform
# ============================================================================
print("Example 2: Out-of-place transform")
print("-" * 70)

majority = np.array([0, 0, 0, 1, 0, 1, 1, 1], dtype=np.uint8)
anf = pyanf.compute_anf(majority)

print(f"Majority of 3: {majority} (unchanged)")
print(f"ANF:           {anf.astype(int)}  ->  f = {monomials(anf)}")
print(f"Back again:    {pyanf.anf_to_truth_table(anf).astype(int)}")
print()

# ============================================================================
# Example 3: Backends
# ============================================================================
print("Example 3: Backends")
print("-" * 70)

rng = np.random.default_rng(0)
table = rng.integers(0, 2, 1 << 10).astype(bool)

via_numpy = table.copy()
pyanf.transform_array(via_numpy, backend=pyanf.Backend.NUMPY)

via_python = table.tolist()
pyanf.transform_array(via_python, backend='python')

print(f"NumPy and pure-Python backends agree: {np.array_equal(via_numpy, via_python)}")
print(f"Default backend: {pyanf.default_config().backend.value}")
print()

# ============================================================================
# Example 4: Utility functions
# ============================================================================
print("Example 4: Utility functions")
print("-" * 70)

# Check if size is power of 2
sizes = [128, 256, 300, 1024]
for size in sizes:
    if pyanf.is_power_of_2(size):
        print(f"len={size:4d}: power of 2 (n={pyanf.log2(size)} variables)")
    else:
        print(f"len={size:4d}: NOT power of 2")

try:
    pyanf.transform_array([True, False, True])
except pyanf.InvalidLengthError as e:
    print(f"Rejected: {e}")
print()

# ============================================================================
# Summary
# ============================================================================
print("=" * 70)
print(f"pyanf version: {pyanf.version()}")
print("=" * 70)
