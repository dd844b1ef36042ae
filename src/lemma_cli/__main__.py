from __future__ import annotations
import json
import pathlib
from typing import Optional

import typer
from rich import print
from pydantic import ValidationError

from lemma_proof.algorithm import get_algorithm
from lemma_proof.logutil import setup_logging
from lemma_proof.models import ProofDocument
from lemma_proof.proof import InclusionProof, ProofShapeError
from lemma_proof.settings import settings
from lemma_sdk.verify import codec_for

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main():
    setup_logging(settings.log_level)


def _read_input(src: str, as_hex: bool) -> bytes:
    p = pathlib.Path(src)
    if not p.exists():
        raise typer.BadParameter(f"no such file: {src}")
    if p.stat().st_size > settings.max_proof_bytes:
        print(f"[red]{src} exceeds {settings.max_proof_bytes} bytes[/red]")
        raise typer.Exit(code=2)
    raw = p.read_bytes()
    if not as_hex:
        return raw
    try:
        return bytes.fromhex(raw.decode("ascii").strip())
    except (UnicodeDecodeError, ValueError):
        raise typer.BadParameter(f"{src} does not contain hex") from None


def _decode_or_exit(data: bytes, algorithm: str, strict: bool) -> InclusionProof:
    result = InclusionProof.from_bytes(data, codec_for(algorithm), strict=strict)
    if not result.ok:
        print(f"[red]Not a proof[/red]: {result.error}")
        raise typer.Exit(code=1)
    return result.value


def _checked_algorithm(name: str) -> str:
    try:
        get_algorithm(name)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from None
    return name.lower()


def _hex_option(value: Optional[str], name: str) -> Optional[bytes]:
    if value is None:
        return None
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise typer.BadParameter(f"{name} must be hex") from None


@app.command()
def encode(
    doc: str = typer.Argument(..., help="Proof JSON document"),
    out: Optional[str] = typer.Option(None, help="Write raw bytes here instead of printing hex"),
):
    """Encode a JSON proof document into the binary wire format."""
    try:
        document = ProofDocument.model_validate_json(_read_input(doc, False))
        proof = document.to_proof()
        data = proof.into_bytes(codec_for(document.algorithm))
    except ValidationError as e:
        print(f"[red]Invalid proof document[/red]: {e.error_count()} error(s)")
        raise typer.Exit(code=2)
    except (ProofShapeError, ValueError) as e:
        print(f"[red]Invalid proof[/red]: {e}")
        raise typer.Exit(code=2)
    if out:
        pathlib.Path(out).write_bytes(data)
        print(f"[green]Wrote {len(data)} bytes to {out}[/green]")
    else:
        typer.echo(data.hex())


@app.command()
def decode(
    src: str = typer.Argument(..., help="Encoded proof file"),
    as_hex: bool = typer.Option(False, "--hex", help="Input file holds hex text"),
    algorithm: str = typer.Option(settings.hash_algorithm, help="Hash algorithm"),
    strict: bool = typer.Option(settings.strict_decode, help="Re-check lemma/path shape"),
    out: Optional[str] = typer.Option(None, help="Write JSON here instead of stdout"),
):
    """Decode a binary proof into a canonical JSON document."""
    algorithm = _checked_algorithm(algorithm)
    proof = _decode_or_exit(_read_input(src, as_hex), algorithm, strict)
    doc = ProofDocument.from_proof(proof, algorithm=algorithm)
    canon = doc.canonical_json()
    if out:
        pathlib.Path(out).write_bytes(canon)
        print(f"[green]Wrote proof document to {out}[/green]")
    else:
        typer.echo(canon.decode())


@app.command()
def verify(
    src: str = typer.Argument(..., help="Encoded proof file"),
    as_hex: bool = typer.Option(False, "--hex", help="Input file holds hex text"),
    algorithm: str = typer.Option(settings.hash_algorithm, help="Hash algorithm"),
    strict: bool = typer.Option(settings.strict_decode, help="Re-check lemma/path shape"),
    leaf: Optional[str] = typer.Option(None, help="Expected leaf hash (hex)"),
    root: Optional[str] = typer.Option(None, help="Trusted root hash (hex)"),
):
    """Check that a proof folds to its root, optionally against a known leaf/root."""
    algorithm = _checked_algorithm(algorithm)
    expected_leaf = _hex_option(leaf, "--leaf")
    expected_root = _hex_option(root, "--root")
    proof = _decode_or_exit(_read_input(src, as_hex), algorithm, strict)

    ok = proof.validate(get_algorithm(algorithm))
    if ok and expected_leaf is not None:
        ok = proof.item() == expected_leaf
    if ok and expected_root is not None:
        ok = proof.root() == expected_root
    typer.echo(json.dumps({"valid": ok}))
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def leaf(
    data: str = typer.Argument(..., help="Leaf data (UTF-8 text)"),
    algorithm: str = typer.Option(settings.hash_algorithm, help="Hash algorithm"),
):
    """Print the leaf hash of DATA under the chosen algorithm."""
    typer.echo(get_algorithm(_checked_algorithm(algorithm))().leaf(data.encode("utf-8")).hex())


if __name__ == "__main__":
    app()
