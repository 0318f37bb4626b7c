"""
Parsers for the compact string formats accepted by the container app tools.
"""
from typing import List

from ..MODELS.container_app import EnvVar

PLAIN_ENV_TYPE = "plain"


class EnvParser:
    """
    Parser for environment variables written as ``NAME='value';OTHER='value2'``.
    """
    @staticmethod
    def parse_from_string(content: str) -> List[EnvVar]:
        """
        Parses environment variables from a semicolon separated string.

        Entries without ``=`` or with an empty name are dropped. A value wrapped
        in single quotes has the quotes removed; the value itself may contain
        spaces or further ``=`` characters.

        Args:
            content (str): Raw string, e.g. ``A='1';B='two words'``.

        Returns:
            List[EnvVar]: Variables in input order, all of type "plain".
        """
        env = []
        if not content:
            return env

        for entry in content.split(';'):
            if '=' not in entry:
                continue

            name, value = entry.split('=', 1)
            name = name.strip()
            value = value.strip()

            if not name:
                continue

            if len(value) >= 2 and value.startswith("'") and value.endswith("'"):
                value = value[1:-1]

            env.append(EnvVar(name=name, value=value, type=PLAIN_ENV_TYPE))

        return env


def split_comma_list(value: str) -> List[str]:
    """
    Splits ``"python, app.py"`` into ``["python", "app.py"]``.
    An empty string yields an empty list; inner empty tokens are kept.
    """
    if not value:
        return []
    return [token.strip() for token in value.split(',')]
