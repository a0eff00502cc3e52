"""Bit-level comparison of uploaded binary payloads.

Modules:
  diff_engine   - runs of differing bits between two equal-length buffers
  resolver      - classifies a comparison from its (possibly missing) sides
  service       - decode, store and resolve; used by the HTTP layer
  api           - Flask application serving /v1/diff
"""
