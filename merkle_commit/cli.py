import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .allowlist import build_allowlist
from .errors import MerkleError
from .export import hex_list, solidity_proof_snippet, write_json
from .reveal import build_metadata_commitment
from .settings import LOG_LEVELS, settings
from .tree import build_proof, build_root, to_digest, verify


def _read_lines(path: Optional[str]) -> List[str]:
    if not path:
        return []
    lines = Path(path).read_text().splitlines()
    return [ln.strip() for ln in lines if ln.strip() and not ln.strip().startswith("#")]


def cmd_root(ns: argparse.Namespace) -> int:
    print("0x" + build_root(ns.leaves).hex())
    return 0


def cmd_prove(ns: argparse.Namespace) -> int:
    result = build_proof(ns.leaves, ns.index)
    print(json.dumps({
        "index": ns.index,
        "leaf": "0x" + to_digest(ns.leaves[ns.index]).hex(),
        "proof": hex_list(result.proof),
        "root": "0x" + result.root.hex(),
    }, indent=2))
    return 0


def cmd_verify(ns: argparse.Namespace) -> int:
    ok = verify(ns.leaf, ns.proof, ns.index, ns.root)
    print("OK" if ok else "FAIL")
    return 0 if ok else 2


def cmd_allowlist(ns: argparse.Namespace) -> int:
    addresses = list(ns.addresses) + _read_lines(ns.file)
    allowlist = build_allowlist(addresses, encoding=ns.encoding, sort=ns.sort)
    print(f"Merkle Root: 0x{allowlist.root.hex()}")
    for entry in allowlist.entries:
        print(f"\n[{entry.index}] {entry.address}")
        print("Proof:", "[" + ", ".join(hex_list(entry.proof)) + "]")
        if ns.solidity:
            print("\n// Solidity")
            print(solidity_proof_snippet(entry.address[2:].upper(), entry.proof))
    if ns.out:
        write_json(allowlist.to_dict(), ns.out)
        print(f"\nSaved: {ns.out}")
    return 0


def cmd_reveal(ns: argparse.Namespace) -> int:
    uris = list(ns.uris) + _read_lines(ns.file)
    commitment = build_metadata_commitment(uris)
    print(f"Merkle Root: 0x{commitment.root.hex()}")
    for entry in commitment.entries:
        print(f"\n[{entry.token_id}] {entry.uri}")
        print("Proof:", "[" + ", ".join(hex_list(entry.proof)) + "]")
    if ns.out:
        write_json(commitment.to_dict(), ns.out)
        print(f"\nSaved: {ns.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="merkle-commit", description="Sorted-pair keccak256 Merkle roots and proofs")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help="logging level (default from MERKLE_COMMIT_LOG_LEVEL)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    s_root = sub.add_parser("root", help="Compute the root of hex leaf digests")
    s_root.add_argument("leaves", nargs="+")
    s_root.set_defaults(func=cmd_root)

    s_prove = sub.add_parser("prove", help="Build the proof for one leaf")
    s_prove.add_argument("--index", type=int, required=True)
    s_prove.add_argument("leaves", nargs="+")
    s_prove.set_defaults(func=cmd_prove)

    s_verify = sub.add_parser("verify", help="Check a leaf and proof against a root")
    s_verify.add_argument("--leaf", required=True)
    s_verify.add_argument("--root", required=True)
    s_verify.add_argument("--index", type=int, required=True)
    s_verify.add_argument("proof", nargs="*")
    s_verify.set_defaults(func=cmd_verify)

    s_allow = sub.add_parser("allowlist", help="Commit to a list of EVM or Tron addresses")
    s_allow.add_argument("addresses", nargs="*")
    s_allow.add_argument("--file", help="one address per line")
    s_allow.add_argument("--encoding", choices=["packed", "padded"], default=settings.address_encoding)
    s_allow.add_argument("--sort", action=argparse.BooleanOptionalAction, default=settings.sort_addresses)
    s_allow.add_argument("--solidity", action="store_true", help="print bytes32[] proof snippets")
    s_allow.add_argument("--out", nargs="?", const=str(settings.output_path), help="write the JSON document")
    s_allow.set_defaults(func=cmd_allowlist)

    s_reveal = sub.add_parser("reveal", help="Commit to token URIs, token id = position")
    s_reveal.add_argument("uris", nargs="*")
    s_reveal.add_argument("--file", help="one URI per line")
    s_reveal.add_argument("--out", nargs="?", const=str(settings.output_path), help="write the JSON document")
    s_reveal.set_defaults(func=cmd_reveal)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    ns = build_parser().parse_args(argv)
    logging.basicConfig(level=ns.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return ns.func(ns)
    except (MerkleError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
