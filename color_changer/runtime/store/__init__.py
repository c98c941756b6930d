"""
Storage abstractions for the Color Changer runtime.

Includes:
- SessionStore: session attribute storage (in-memory + optional file-backed)
- LogStore / ConsoleLogStore: append-only request/response event logging
"""
