"""Key files written by a chain binary's ``keys add --output json``."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from ..exceptions import ValidationError
from ..types.common import Bech32Address

__all__ = ["KeyFile"]


@dataclass(frozen=True)
class KeyFile:
    """
    Parsed ``keys add`` output.

    ``mnemonic`` is the only field the key ring derives from; ``address`` is
    kept to cross-check the derivation.
    """

    name: str
    type: str
    address: Bech32Address
    pubkey: str
    mnemonic: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyFile":
        """
        Build from decoded JSON.

        Raises:
            ValidationError: If a required field is missing or not a string
        """
        if not isinstance(data, dict):
            raise ValidationError(f"Key file must be a JSON object, got {type(data).__name__}")

        values = {}
        for name in ("name", "type", "address", "pubkey", "mnemonic"):
            value = data.get(name)
            if not isinstance(value, str):
                raise ValidationError(f"Key file field '{name}' must be a string")
            values[name] = value

        return cls(
            name=values["name"],
            type=values["type"],
            address=Bech32Address(values["address"]),
            pubkey=values["pubkey"],
            mnemonic=values["mnemonic"],
        )

    @classmethod
    def from_json(cls, content: Union[str, bytes]) -> "KeyFile":
        """Parse JSON text."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid key file JSON: {e}") from e
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return f"KeyFile(name={self.name!r}, type={self.type!r}, address={self.address!r})"
