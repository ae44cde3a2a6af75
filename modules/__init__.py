"""
Feature modules for the Paywire client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- client.py: Facade implementation
- transport.py: HTTP transport to the billing proxy
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
