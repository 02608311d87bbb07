"""
Main entry point for the limit-order codec.

Builds an order from config, signs it with the local key and prints the
order, its hash, the compact (r, vs) signature and the calldata that fills
the whole order. `--show-log` prints previously recorded orders instead.
"""

import sys
import json
import argparse
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from limit_order_codec.core.config import Config
from limit_order_codec.core.errors import InvalidArgument
from limit_order_codec.encoding.extension import ExtensionSegments
from limit_order_codec.encoding.traits import MakerTraitsParams, build_taker_traits
from limit_order_codec.execution.calldata import encode_fill
from limit_order_codec.execution.orders import Order, build_order
from limit_order_codec.execution.signer import LocalOrderSigner, order_hash
from limit_order_codec.execution.typed_data import build_order_data
from limit_order_codec.utils.hexutil import to_hex
from limit_order_codec.utils.state_store import StateStore


class OrderTool:
    """
    Builds and signs one order per run.

    Flow:
    1. Maker traits from config
    2. Order + extension (OrderBuilder)
    3. EIP-712 triple (StructuredDataAdapter)
    4. Signature (LocalOrderSigner), unless signing is disabled
    """

    def __init__(self, config: Config, sign: bool = True):
        """
        Initialize the tool.

        Args:
            config: CLI configuration
            sign: Sign with config.signer.private_key
        """
        self.config = config

        errors = config.validate(require_signer=sign)
        if errors:
            print("[ERROR] Configuration validation failed:")
            for err in errors:
                print(f"  - {err}")
            sys.exit(1)

        self.signer: Optional[LocalOrderSigner] = None
        if sign:
            self.signer = LocalOrderSigner(config.signer.private_key)
            print(f"[Init] Signer {self.signer.address}")

        self.state_store = StateStore(config.output.state_dir) if config.output.record_orders else None

    def build(self) -> Order:
        cfg = self.config
        maker = cfg.order.maker or (self.signer.address if self.signer else "")
        traits = MakerTraitsParams(**vars(cfg.maker_traits)).build()
        return build_order(
            salt=cfg.order.salt,
            maker=maker,
            receiver=cfg.order.receiver,
            maker_asset=cfg.order.maker_asset,
            taker_asset=cfg.order.taker_asset,
            making_amount=cfg.order.making_amount,
            taking_amount=cfg.order.taking_amount,
            maker_traits=traits,
            extension=ExtensionSegments(**vars(cfg.extension)),
        )

    def run(self) -> dict:
        order = self.build()
        order_data = build_order_data(
            self.config.protocol.chain_id,
            self.config.protocol.verifying_contract,
            order,
        )
        record = {
            "chainId": self.config.protocol.chain_id,
            "verifyingContract": order_data.domain["verifyingContract"],
            "orderHash": to_hex(order_hash(order_data)),
            "order": order.to_dict(),
        }

        if self.signer:
            signature = self.signer.sign(order_data)
            r, vs = signature.compact_hex()
            record["signature"] = to_hex(signature.signature)
            record["r"] = r
            record["vs"] = vs

            # First fill of an order with an extension must pass it in args
            taker_traits = build_taker_traits(extension=order.extension)
            r_int, vs_int = signature.compact()
            calldata = encode_fill(order, r_int, vs_int, order.taking_amount, taker_traits)
            record["fillCalldata"] = to_hex(calldata)

        if self.state_store:
            self.state_store.append_jsonl("orders", record)
            print(f"[Output] Recorded order in {self.state_store.data_dir / 'orders.jsonl'}")

        return record


def show_log(config: Config, limit: int) -> list:
    """Print the last `limit` recorded orders, one JSON object per line."""
    records = StateStore(config.output.state_dir).read_jsonl("orders", limit=limit)
    print(f"[Output] {len(records)} recorded order(s) in {config.output.state_dir}")
    for record in records:
        print(json.dumps(record))
    return records


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Build and sign a limit order")
    parser.add_argument("--config", type=str, default="", help="Path to YAML config file")
    parser.add_argument("--no-sign", action="store_true", help="Build the order without signing it")
    parser.add_argument("--show-log", type=int, default=0, metavar="N", help="Print the last N recorded orders and exit")
    args = parser.parse_args()

    # Load .env if present (before Config) to populate LOP_* variables
    load_dotenv(dotenv_path=Path.cwd() / ".env")

    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    if args.show_log:
        show_log(config, args.show_log)
        return

    tool = OrderTool(config, sign=not args.no_sign)
    try:
        record = tool.run()
    except InvalidArgument as e:
        print(f"[ERROR] {e}")
        sys.exit(1)
    print(json.dumps(record, indent=2))


if __name__ == "__main__":
    main()
