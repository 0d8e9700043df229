"""Snow-removal TCO core: electric vs gas equipment vs paid service."""
