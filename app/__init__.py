"""Coach plans API package.

Kept as a regular package so ``app`` resolves to this project rather than to
an unrelated distribution of the same name.
"""
