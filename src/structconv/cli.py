import json
import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from structconv.convert import Converter, Mode
from structconv.errors import StructconvError
from structconv.jwt import decode_jwt, format_jwt, sign_hs256, verify_hmac_signature
from structconv.logging_setup import configure_logging, get_logger
from structconv.settings import Settings, default_config_path
from structconv.tree_view import build_tree

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Validate, format, minify and convert JSON, XML, YAML and TOML.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        help="YAML settings file (defaults to $STRUCTCONV_CONFIG).",
    ),
):
    load_dotenv(override=False)
    ctx.ensure_object(dict)
    cfg_path = str(config) if config else default_config_path()
    settings = Settings.load(cfg_path)
    ctx.obj["SETTINGS"] = settings

    configure_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        structured=settings.logging.structured,
    )
    get_logger("structconv.cli").debug("Settings loaded", config=cfg_path)


def _settings(ctx: typer.Context) -> Settings:
    return (ctx.obj or {}).get("SETTINGS") or Settings()


def _read_input(source: str) -> str:
    try:
        if source == "-":
            return sys.stdin.read()
        path = Path(source)
        if not path.exists():
            raise typer.BadParameter(f"Input file not found: {path}")
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise typer.BadParameter(f"Input is not valid UTF-8 text: {e}") from e


def _resolve_mode(source: str, mode: Optional[Mode]) -> Mode:
    if mode is not None:
        return mode
    if source == "-":
        raise typer.BadParameter("--mode is required when reading from stdin")
    try:
        return Mode.from_suffix(Path(source).suffix)
    except StructconvError as e:
        raise typer.BadParameter(f"{e}; pass --mode") from e


def _emit(result: str, output: Optional[Path], mode: Mode) -> None:
    if output is None:
        typer.echo(result)
        return
    if not output.suffix:
        output = output.with_suffix(f".{mode.extension}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result if result.endswith("\n") else result + "\n", encoding="utf-8")
    console.print(f"wrote: {escape(str(output))}")


def _fail(e: Exception) -> None:
    err_console.print(f"[red]{escape(str(e))}[/]")
    raise typer.Exit(code=1)


INPUT_ARG = typer.Argument(..., help="Input file, or '-' for stdin.")
MODE_OPT = typer.Option(None, "--mode", "-m", help="Input format (default: from file extension).")
OUTPUT_OPT = typer.Option(None, "--output", "-o", help="Write the result to this file.")


@app.command("format")
def format_cmd(
    ctx: typer.Context,
    source: str = INPUT_ARG,
    mode: Optional[Mode] = MODE_OPT,
    output: Optional[Path] = OUTPUT_OPT,
):
    """Pretty-print a document (decodes a JWT)."""
    mode = _resolve_mode(source, mode)
    try:
        result = Converter(_settings(ctx)).beautify(_read_input(source), mode)
    except StructconvError as e:
        _fail(e)
    _emit(result, output, Mode.JSON if mode is Mode.JWT else mode)


@app.command("minify")
def minify_cmd(
    ctx: typer.Context,
    source: str = INPUT_ARG,
    mode: Optional[Mode] = MODE_OPT,
    output: Optional[Path] = OUTPUT_OPT,
):
    """Minify a document."""
    mode = _resolve_mode(source, mode)
    try:
        result = Converter(_settings(ctx)).minify(_read_input(source), mode)
    except StructconvError as e:
        _fail(e)
    _emit(result, output, mode)


@app.command("validate")
def validate_cmd(
    ctx: typer.Context,
    source: str = INPUT_ARG,
    mode: Optional[Mode] = MODE_OPT,
):
    """Check a document; exits with status 1 when it is invalid."""
    mode = _resolve_mode(source, mode)
    if Converter(_settings(ctx)).validate(_read_input(source), mode):
        console.print(f"[green]Valid {mode.value.upper()}[/]")
        return
    err_console.print(f"[red]Invalid {mode.value.upper()} format[/]")
    raise typer.Exit(code=1)


@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source: str = INPUT_ARG,
    to: Mode = typer.Option(..., "--to", "-t", help="Target format."),
    mode: Optional[Mode] = MODE_OPT,
    output: Optional[Path] = OUTPUT_OPT,
    root_tag: Optional[str] = typer.Option(
        None, "--root-tag", help="Root element for XML output when the data has no single root."
    ),
    escape_xml: Optional[bool] = typer.Option(
        None, "--escape/--no-escape", help="Escape markup characters in XML output."
    ),
):
    """Convert a document to another format."""
    mode = _resolve_mode(source, mode)
    try:
        result = Converter(_settings(ctx)).convert(
            _read_input(source), mode, to, root_tag=root_tag, escape=escape_xml
        )
    except StructconvError as e:
        _fail(e)
    _emit(result, output, to)


@app.command("tree")
def tree_cmd(
    ctx: typer.Context,
    source: str = INPUT_ARG,
    mode: Optional[Mode] = MODE_OPT,
):
    """Show a document as a tree."""
    mode = _resolve_mode(source, mode)
    text = _read_input(source)
    try:
        if mode is Mode.JWT:
            value = decode_jwt(text)
        else:
            value = Converter(_settings(ctx)).parse_input(text, mode)
    except StructconvError as e:
        _fail(e)
    console.print(build_tree(value))


# --- JWT sub-commands ---
jwt_app = typer.Typer(help="JWT commands")
app.add_typer(jwt_app, name="jwt")


def _is_file(candidate: str) -> bool:
    try:
        return Path(candidate).is_file()
    except OSError:
        # e.g. a token longer than the filesystem name limit
        return False


def _token(token: str) -> str:
    # accept a literal token, a file path or '-'
    if token == "-" or _is_file(token):
        return _read_input(token).strip()
    return token.strip()


@jwt_app.command("decode")
def jwt_decode(token: str = typer.Argument(..., help="Token, token file, or '-'.")):
    """Print the decoded header, payload and raw signature."""
    try:
        typer.echo(format_jwt(_token(token)))
    except StructconvError as e:
        _fail(e)


@jwt_app.command("verify")
def jwt_verify(
    token: str = typer.Argument(..., help="Token, token file, or '-'."),
    secret: str = typer.Option(..., "--secret", envvar="STRUCTCONV_JWT_SECRET", help="HS256 secret."),
):
    """Verify an HS256 signature; exits with status 1 when it does not match."""
    if verify_hmac_signature(_token(token), secret):
        console.print("[green]Signature verified[/]")
        return
    err_console.print("[red]Invalid signature[/]")
    raise typer.Exit(code=1)


@jwt_app.command("sign")
def jwt_sign(
    payload: str = typer.Argument(..., help="JSON payload, payload file, or '-'."),
    secret: str = typer.Option(..., "--secret", envvar="STRUCTCONV_JWT_SECRET", help="HS256 secret."),
):
    """Create an HS256 token for a JSON payload."""
    text = _read_input(payload) if payload == "-" or _is_file(payload) else payload
    try:
        claims = json.loads(text)
    except ValueError as e:
        _fail(e)
    if not isinstance(claims, dict):
        _fail(ValueError("JWT payload must be a JSON object"))
    typer.echo(sign_hs256(claims, secret))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
