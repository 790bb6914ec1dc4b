"""
Benchmark suite for numsep stream formatting performance.

Compares the streaming formatter against a one-shot regular expression
baseline and measures memory held while streaming in small chunks.
"""
