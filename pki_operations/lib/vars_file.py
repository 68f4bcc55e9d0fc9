"""Render PKIConfig into the easyrsa `vars` settings file, and read it back."""

import re
from pathlib import Path
from typing import Any

from .commands import escape_shell
from .config import PKIConfig, resolve_config
from .errors import InvalidConfigurationError

_SET_VAR = re.compile(r'^set_var\s+(EASYRSA_\w+)\s+"((?:\\.|[^"\\])*)"\s*$')
_UNESCAPE = re.compile(r"\\(.)")

# vars name -> (PKIConfig field, converter)
_FIELDS = {
    "EASYRSA_CA_EXPIRE": ("days", int),
    "EASYRSA_CERT_EXPIRE": ("cert_days", int),
    "EASYRSA_DIGEST": ("digest", str),
    "EASYRSA_ALGO": ("algo", str),
    "EASYRSA_KEY_SIZE": ("key_size", int),
    "EASYRSA_CURVE": ("curve", str),
}


def render_vars(config: PKIConfig) -> str:
    """Render one `set_var NAME "value"` line per configuration field.

    EASYRSA_BATCH is always set so easyrsa never stops to prompt.
    """
    values = [
        ("EASYRSA_PKI", str(config.pki)),
        ("EASYRSA_CA_EXPIRE", str(config.days)),
        ("EASYRSA_CERT_EXPIRE", str(config.cert_days)),
        ("EASYRSA_DIGEST", config.digest),
        ("EASYRSA_ALGO", config.algo),
        ("EASYRSA_KEY_SIZE", str(config.key_size)),
        ("EASYRSA_CURVE", config.curve),
        ("EASYRSA_BATCH", "1"),
    ]
    # vars is sourced by a shell, so values get the same quoting as command arguments
    lines = [f"set_var {name} {escape_shell(value)}" for name, value in values]
    return "\n".join(lines) + "\n"


def write_vars_file(config: PKIConfig) -> Path:
    """Write the rendered settings to config.vars_file, replacing any previous content.

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(config.vars_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_vars(config), encoding="utf-8")
    return path


def read_vars(path: Path) -> dict[str, Any]:
    """Read the PKIConfig settings stored in a vars file.

    Only `set_var` lines for the settings render_vars writes are picked up;
    EASYRSA_PKI, EASYRSA_BATCH and anything else are ignored.

    Args:
        path: vars file to read

    Returns:
        PKIConfig field values keyed by field name, empty if the file does not exist

    Raises:
        InvalidConfigurationError: If a numeric setting is not an integer
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return {}

    settings: dict[str, Any] = {}
    for line in text.splitlines():
        match = _SET_VAR.match(line.strip())
        if not match or match.group(1) not in _FIELDS:
            continue
        field_name, convert = _FIELDS[match.group(1)]
        value = _UNESCAPE.sub(r"\1", match.group(2))
        try:
            settings[field_name] = convert(value)
        except ValueError as e:
            raise InvalidConfigurationError(f"{match.group(1)} not valid in {path}: {value!r}") from e
    return settings


def load_config(**options: Any) -> PKIConfig:
    """Resolve options on top of the settings already stored for the key-store.

    Options given as None keep the value from the key-store's existing vars
    file, falling back to the PKIConfig default when the file does not set it.
    """
    located = resolve_config(
        easyrsa_dir=options.pop("easyrsa_dir", None),
        pki=options.pop("pki", None),
        vars_file=options.pop("vars_file", None),
    )
    settings = read_vars(Path(located.vars_file))
    settings.update({key: value for key, value in options.items() if value is not None})
    return PKIConfig(
        easyrsa_dir=located.easyrsa_dir,
        pki=located.pki,
        vars_file=located.vars_file,
        **settings,
    )
