"""
Configuration management for the limit-order codec CLI.

Covers the signing domain, the order to build, its maker-traits options,
its extension segments and the local signer key.
Supports loading from YAML/JSON and environment variable overrides.
"""

import os
import string
from dataclasses import dataclass, field

# secp256k1 group order; a private key must lie in [1, n)
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def is_private_key(value: str) -> bool:
    """32-byte hex (optionally 0x-prefixed) secp256k1 private key."""
    digits = value[2:] if value.startswith(("0x", "0X")) else value
    if len(digits) != 64 or not all(c in string.hexdigits for c in digits):
        return False
    return 0 < int(digits, 16) < SECP256K1_N


@dataclass
class ProtocolConfig:
    """Signing domain: chain and verifying (settlement) contract."""

    chain_id: int = 11155111  # Sepolia
    verifying_contract: str = "0xf4ef3861e94ffd680f298abe275b2ef8eca1517a"


@dataclass
class MakerTraitsConfig:
    """Maker-side options packed into the makerTraits word."""

    allowed_sender: str = "0x0000000000000000000000000000000000000000"
    should_check_epoch: bool = False
    allow_partial_fill: bool = True
    allow_multiple_fills: bool = True
    use_permit2: bool = False
    unwrap_weth: bool = False
    expiry: int = 0  # Unix seconds, 0 = never expires
    nonce: int = 0
    series: int = 0


@dataclass
class ExtensionConfig:
    """Optional extension segments, as 0x-prefixed hex strings."""

    maker_asset_suffix: str = "0x"
    taker_asset_suffix: str = "0x"
    making_amount_data: str = "0x"
    taking_amount_data: str = "0x"
    predicate: str = "0x"
    permit: str = "0x"
    pre_interaction: str = "0x"
    post_interaction: str = "0x"
    custom_data: str = "0x"


@dataclass
class OrderConfig:
    """Order scalar fields."""

    salt: int = 1
    maker: str = ""  # Defaults to the signer address when empty
    receiver: str = "0x0000000000000000000000000000000000000000"
    maker_asset: str = ""
    taker_asset: str = ""
    making_amount: int = 0  # Base units
    taking_amount: int = 0  # Base units


@dataclass
class SignerConfig:
    """Local signing key."""

    private_key: str = ""  # Hex private key (from env)


@dataclass
class OutputConfig:
    """Where built/signed orders are recorded."""

    state_dir: str = "data/state"
    record_orders: bool = False


@dataclass
class Config:
    """
    Complete CLI configuration.

    Load from YAML/environment variables.

    Environment variables (override config file):
    - LOP_CHAIN_ID: chain id of the signing domain
    - LOP_VERIFYING_CONTRACT: limit order protocol address
    - LOP_PRIVATE_KEY: maker private key
    """

    protocol: ProtocolConfig = field(default_factory=ProtocolConfig)
    order: OrderConfig = field(default_factory=OrderConfig)
    maker_traits: MakerTraitsConfig = field(default_factory=MakerTraitsConfig)
    extension: ExtensionConfig = field(default_factory=ExtensionConfig)
    signer: SignerConfig = field(default_factory=SignerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        """Load environment variable overrides."""
        if os.getenv("LOP_CHAIN_ID"):
            self.protocol.chain_id = int(os.getenv("LOP_CHAIN_ID", "0"))

        if os.getenv("LOP_VERIFYING_CONTRACT"):
            self.protocol.verifying_contract = os.getenv("LOP_VERIFYING_CONTRACT", "")

        if os.getenv("LOP_PRIVATE_KEY"):
            self.signer.private_key = os.getenv("LOP_PRIVATE_KEY", "")

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load config from YAML file."""
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Load config from dictionary."""
        from dataclasses import is_dataclass, fields
        def build(dc_type, data):
            if not is_dataclass(dc_type):
                return data
            kwargs = {}
            for f in fields(dc_type):
                if f.name in data:
                    val = data[f.name]
                    if hasattr(f.type, "__dataclass_fields__"):
                        kwargs[f.name] = build(f.type, val)
                    else:
                        kwargs[f.name] = val
            return dc_type(**kwargs)
        return build(cls, data)

    def validate(self, require_signer: bool = True) -> list[str]:
        """
        Validate configuration parameters.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if require_signer and not self.signer.private_key:
            errors.append("LOP_PRIVATE_KEY environment variable required")

        if require_signer and self.signer.private_key and not is_private_key(self.signer.private_key):
            errors.append("LOP_PRIVATE_KEY must be a 32-byte hex secp256k1 private key")

        if not require_signer and not self.order.maker:
            errors.append("order.maker required when not signing")

        if self.protocol.chain_id <= 0:
            errors.append("protocol.chain_id must be > 0")

        if not self.protocol.verifying_contract:
            errors.append("protocol.verifying_contract required")

        if not self.order.maker_asset or not self.order.taker_asset:
            errors.append("order.maker_asset and order.taker_asset required")

        if self.order.making_amount <= 0 or self.order.taking_amount <= 0:
            errors.append("order.making_amount and order.taking_amount must be > 0")

        for name in ("expiry", "nonce", "series"):
            value = getattr(self.maker_traits, name)
            if not (0 <= value < (1 << 40)):
                errors.append(f"maker_traits.{name} must be in [0, 2**40)")

        return errors
