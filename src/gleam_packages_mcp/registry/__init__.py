from gleam_packages_mcp.registry.hexpm import HexRegistry

__all__ = ["HexRegistry"]
