"""Tests for PKIConfig option resolution."""

from pathlib import Path

import pytest

from pki_operations.lib.config import CURVES, DIGESTS, PKIConfig, resolve_config
from pki_operations.lib.errors import EasyRSAError, InvalidConfigurationError


class TestDefaults:
    """Tests for default option values."""

    def test_documented_defaults(self, tmp_path: Path) -> None:
        """Unset options take the documented defaults."""
        config = PKIConfig(easyrsa_dir=tmp_path)

        assert config.days == 3650
        assert config.cert_days == 825
        assert config.digest == "sha256"
        assert config.algo == "rsa"
        assert config.key_size == 2048
        assert config.curve == "sect571r1"

    def test_pki_defaults_under_easyrsa_dir(self, tmp_path: Path) -> None:
        """Default PKI directory is <easyrsa_dir>/pki."""
        config = PKIConfig(easyrsa_dir=tmp_path)

        assert config.pki == tmp_path / "pki"

    def test_vars_file_defaults_next_to_pki_named_after_it(self, tmp_path: Path) -> None:
        """Default vars file sits beside the PKI directory and takes its name."""
        config = PKIConfig(easyrsa_dir=tmp_path, pki=tmp_path / "stores" / "pki")

        assert config.vars_file == tmp_path / "stores" / "pki.vars"

    def test_easyrsa_dir_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """EASYRSA environment variable sets the default install directory."""
        monkeypatch.setenv("EASYRSA", str(tmp_path))

        assert PKIConfig().easyrsa_dir == tmp_path

    def test_easyrsa_bin(self, tmp_path: Path) -> None:
        """Entry point is <easyrsa_dir>/easyrsa."""
        assert PKIConfig(easyrsa_dir=tmp_path).easyrsa_bin == tmp_path / "easyrsa"

    def test_config_is_frozen(self, tmp_path: Path) -> None:
        """Resolved configuration cannot be mutated."""
        config = PKIConfig(easyrsa_dir=tmp_path)

        with pytest.raises(AttributeError):
            config.days = 1  # type: ignore[misc]


class TestPathResolution:
    """Tests for relative/absolute path handling."""

    def test_relative_pki_resolved_against_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative PKI path is anchored at the current working directory."""
        monkeypatch.chdir(tmp_path)

        config = PKIConfig(easyrsa_dir=tmp_path, pki=Path(".tmp/pki"))

        assert config.pki == tmp_path / ".tmp" / "pki"
        assert config.pki.is_absolute()

    def test_string_pki_accepted(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """PKI path may be given as a string."""
        monkeypatch.chdir(tmp_path)

        config = PKIConfig(easyrsa_dir=tmp_path, pki="pki")  # type: ignore[arg-type]

        assert config.pki == tmp_path / "pki"

    def test_absolute_pki_untouched(self, tmp_path: Path) -> None:
        """Absolute PKI path is kept as given."""
        pki = tmp_path / "a" / ".." / "pki"

        config = PKIConfig(easyrsa_dir=tmp_path, pki=pki)

        assert config.pki == pki


class TestValidation:
    """Tests for closed-set validation of digest, curve and algo."""

    @pytest.mark.parametrize("digest", DIGESTS)
    def test_valid_digests_accepted(self, tmp_path: Path, digest: str) -> None:
        """Every digest in the allowed set constructs."""
        assert PKIConfig(easyrsa_dir=tmp_path, digest=digest).digest == digest

    @pytest.mark.parametrize("digest", ["sha3-256", "SHA256", "", "md4"])
    def test_invalid_digest_rejected(self, tmp_path: Path, digest: str) -> None:
        """Digest outside the allowed set fails construction."""
        with pytest.raises(InvalidConfigurationError, match="digest"):
            PKIConfig(easyrsa_dir=tmp_path, digest=digest)

    @pytest.mark.parametrize("curve", ["prime256v1", "secp384r1", "brainpoolP512t1", "SM2"])
    def test_valid_curves_accepted(self, tmp_path: Path, curve: str) -> None:
        """Named curves from the allowed set construct."""
        assert PKIConfig(easyrsa_dir=tmp_path, algo="ec", curve=curve).curve == curve

    @pytest.mark.parametrize("curve", ["ed25519", "P-256", "secp256r1"])
    def test_invalid_curve_rejected(self, tmp_path: Path, curve: str) -> None:
        """Curve outside the allowed set fails construction."""
        with pytest.raises(InvalidConfigurationError, match="curve"):
            PKIConfig(easyrsa_dir=tmp_path, curve=curve)

    def test_invalid_algo_rejected(self, tmp_path: Path) -> None:
        """Only rsa and ec are accepted."""
        with pytest.raises(InvalidConfigurationError, match="algorithm"):
            PKIConfig(easyrsa_dir=tmp_path, algo="dsa")

    def test_validation_error_is_value_error(self, tmp_path: Path) -> None:
        """Validation errors are both EasyRSAError and ValueError."""
        with pytest.raises(ValueError):
            PKIConfig(easyrsa_dir=tmp_path, digest="nope")
        with pytest.raises(EasyRSAError):
            PKIConfig(easyrsa_dir=tmp_path, digest="nope")

    def test_curve_set_size(self) -> None:
        """Curve set carries every named curve easyrsa accepts."""
        assert len(CURVES) == 82
        assert len(set(CURVES)) == len(CURVES)


class TestResolveConfig:
    """Tests for resolve_config partial options."""

    def test_none_values_use_defaults(self, tmp_path: Path) -> None:
        """None-valued options fall back to defaults."""
        config = resolve_config(easyrsa_dir=tmp_path, pki=None, days=None, digest="sha512")

        assert config.pki == tmp_path / "pki"
        assert config.days == 3650
        assert config.digest == "sha512"

    def test_unknown_option_rejected(self, tmp_path: Path) -> None:
        """Unknown option names are a TypeError."""
        with pytest.raises(TypeError):
            resolve_config(easyrsa_dir=tmp_path, colour="blue")
