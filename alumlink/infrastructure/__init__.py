"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the client to the outside world (the backend over HTTP, local
session files, configuration, the console) by implementing the interfaces
defined in the domain layer. Also includes the in-memory substitute backend.
"""
