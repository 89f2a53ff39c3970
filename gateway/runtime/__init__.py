"""Runtime package.

Keep this module dependency-light: importing `gateway.runtime.*` in unit tests
should not require network access or a provider credential.
"""

__all__: list[str] = []
