"""Domain service implementations.

http_services talks to the real backend; the substitute package serves
the same interfaces from memory.
"""
