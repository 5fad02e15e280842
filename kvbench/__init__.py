"""
kvbench - concurrent key-value store micro-benchmark driver.
"""

VERSION = "0.3.0"
