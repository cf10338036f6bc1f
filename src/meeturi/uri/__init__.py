"""URI patterns, fixers, parser, resolver and normalizer."""
