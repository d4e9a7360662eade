"""YAML writer for listing output."""

from calrepo.codec import serialize


class YAMLWriter:
    """Writer for YAML output, using the repository codec."""

    def render(self, data: object) -> str:
        """Render records as YAML."""
        return serialize(data)

    def get_extension(self) -> str:
        """Returns format name."""
        return "yaml"
