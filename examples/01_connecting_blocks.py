"""
Connecting Blocks Example
=========================

Mimics what the editor does each time a connection changes:
- Build an expression tree from function and value blocks
- Type check it
- On a type error, find the block input to highlight
"""

from viskell import Apply, apply, check, load_default_catalog


# ============================================================================
# Blocks
# ============================================================================

catalog = load_default_catalog()

plus = catalog.ident("(+)")
one = catalog.value("Int", "1")
two = catalog.value("Int", "2")
yes = catalog.value("Bool", "True")


# ============================================================================
# Example: Well-typed and ill-typed programs
# ============================================================================

def report(title, expr):
    result = check(expr)
    print(f"{title}: {expr}")
    print(result.format())
    if result.site is not None:
        print(f"  -> highlight input {result.site.index} of block {result.site.function}")
    print()


def main():
    """Check a few small programs built from catalog blocks."""

    # 1 + 2 :: Int
    report("Sum", apply(plus, one, two))

    # map not :: [Bool] -> [Bool]
    report("Partial map", Apply(catalog.ident("map"), catalog.ident("not")))

    # (+) True: Bool is not a Num, blame input 0 of (+)
    report("Constraint", Apply(catalog.ident("(+)"), yes))

    # 1 + True: the second input conflicts with the first
    report(
        "Mismatch",
        apply(catalog.ident("(+)"), catalog.value("Int", "1"), catalog.value("Bool", "True")),
    )


if __name__ == "__main__":
    main()
