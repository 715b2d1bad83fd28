"""
Local LLM client and response-time benchmark.
"""
