"""
Tests for VaultFile: save/load round trips, password rejection, format
rejection, tamper detection and secret wiping.
"""
from dataclasses import dataclass, field
from pathlib import Path

import pytest

import serdevault.vault as vault_module
from serdevault import (
    HEADER_SIZE,
    DecryptionFailed,
    DeserializationError,
    InvalidFormat,
    KdfError,
    KdfParams,
    SerializationError,
    UnsupportedVersion,
    VaultFile,
    VaultIOError,
)
from serdevault.storage.vault import decode


@dataclass
class TestData:
    __test__ = False

    name: str
    value: int
    tags: list[str] = field(default_factory=list)
    optional: str | None = None


def sample() -> TestData:
    return TestData(name="GitHub perso", value=42, tags=["work", "git"], optional="note")


class TestRoundTrip:

    def test_dict(self, make_vault):
        vault = make_vault()
        vault.save({"name": "x", "value": 1})
        assert vault.load() == {"name": "x", "value": 1}

    def test_dataclass(self, make_vault):
        vault = make_vault("correct-horse-battery")
        vault.save(sample())
        assert vault.load(TestData) == sample()

    def test_dataclass_option_none(self, make_vault):
        data = sample()
        data.optional = None
        vault = make_vault()
        vault.save(data)
        assert vault.load(TestData) == data

    @pytest.mark.parametrize("value", [None, 0, "", "ünïcode ✓", [1, [2, [3]]], {"nested": {"list": [True, None, 1.5]}}])
    def test_json_values(self, make_vault, value):
        vault = make_vault()
        vault.save(value)
        assert vault.load() == value

    def test_int_keyed_mapping(self, make_vault):
        vault = make_vault()
        vault.save({1: "a", 2: "b"})
        assert vault.load(dict[int, str]) == {1: "a", 2: "b"}

    def test_empty_password(self, make_vault):
        vault = make_vault("")
        vault.save({"a": 1})
        assert vault.load() == {"a": 1}

    def test_new_handle_same_password(self, make_vault):
        make_vault("pw").save({"a": 1})
        assert make_vault("pw").load() == {"a": 1}


class TestConcreteScenario:

    def test_save_load_wrong_password_bad_version(self, vault_path):
        VaultFile(vault_path, "pw").with_params(8, 1, 1).save({"name": "x", "value": 1})

        assert VaultFile(vault_path, "pw").load() == {"name": "x", "value": 1}

        with pytest.raises(DecryptionFailed):
            VaultFile(vault_path, "wrong").load()

        raw = bytearray(vault_path.read_bytes())
        raw[4] = 99
        vault_path.write_bytes(bytes(raw))
        with pytest.raises(UnsupportedVersion) as exc:
            VaultFile(vault_path, "pw").load()
        assert exc.value.version == 99


class TestPasswords:

    def test_wrong_password(self, make_vault):
        make_vault("correct").save(sample())
        with pytest.raises(DecryptionFailed):
            make_vault("wrong").load(TestData)

    def test_password_is_case_sensitive(self, make_vault):
        make_vault("Secret").save({"a": 1})
        with pytest.raises(DecryptionFailed):
            make_vault("secret").load()


class TestFreshness:

    def test_two_saves_differ(self, make_vault, vault_path):
        vault = make_vault()
        vault.save(sample())
        first = vault_path.read_bytes()
        vault.save(sample())
        second = vault_path.read_bytes()

        assert first != second
        h1, _ = decode(first)
        h2, _ = decode(second)
        assert h1.salt != h2.salt
        assert h1.nonce != h2.nonce


class TestFormatRejection:

    def test_missing_file(self, make_vault):
        with pytest.raises(VaultIOError):
            make_vault().load()

    def test_empty_file(self, make_vault, vault_path):
        vault_path.write_bytes(b"")
        with pytest.raises(InvalidFormat):
            make_vault().load()

    def test_bad_magic(self, make_vault, vault_path):
        vault_path.write_bytes(b"\xff" * (HEADER_SIZE + 16))
        with pytest.raises(InvalidFormat):
            make_vault().load()

    def test_truncated_to_header(self, make_vault, vault_path):
        vault = make_vault()
        vault.save(sample())
        vault_path.write_bytes(vault_path.read_bytes()[:HEADER_SIZE])
        with pytest.raises(DecryptionFailed):
            vault.load()

    def test_bad_version_rejected_before_kdf(self, make_vault, vault_path, monkeypatch):
        vault = make_vault()
        vault.save({"a": 1})
        raw = bytearray(vault_path.read_bytes())
        raw[4] = 2
        vault_path.write_bytes(bytes(raw))

        def no_kdf(*args, **kwargs):
            raise AssertionError("KDF must not run")

        monkeypatch.setattr(vault_module, "derive_key_for", no_kdf)
        with pytest.raises(UnsupportedVersion):
            vault.load()


class TestTamperDetection:

    @pytest.mark.parametrize("offset", [
        5,               # salt
        37,              # memory cost
        42,              # time cost, 1 -> 257
        49,              # nonce
        HEADER_SIZE,     # first ciphertext byte
        -1,              # last tag byte
    ])
    def test_flipped_byte(self, make_vault, vault_path, offset):
        vault = make_vault()
        vault.save({"a": 1})
        raw = bytearray(vault_path.read_bytes())
        raw[offset] ^= 0x01
        vault_path.write_bytes(bytes(raw))
        with pytest.raises(DecryptionFailed):
            vault.load()


class TestParams:

    def test_header_records_save_params(self, vault_path):
        VaultFile(vault_path, "pw").with_params(16, 2, 1).save({})
        assert VaultFile(vault_path, "pw").inspect().kdf_params == KdfParams(16, 2, 1)

    def test_load_ignores_handle_params(self, make_vault, vault_path):
        make_vault("pw").save({"a": 1})
        # params that would fail if they were used for derivation
        reader = VaultFile(vault_path, "pw").with_params(0, 0, 0)
        assert reader.load() == {"a": 1}

    def test_invalid_params_fail_save(self, vault_path):
        vault = VaultFile(vault_path, "pw").with_params(8, 0, 1)
        with pytest.raises(KdfError):
            vault.save({"a": 1})
        assert not vault_path.exists()

    def test_zero_params_in_file(self, make_vault, vault_path):
        make_vault().save({"a": 1})
        raw = bytearray(vault_path.read_bytes())
        raw[41:45] = b"\x00" * 4
        vault_path.write_bytes(bytes(raw))
        with pytest.raises(KdfError):
            make_vault().load()

    def test_default_params(self, vault_path):
        assert VaultFile(vault_path, "pw").params == KdfParams(65536, 3, 1)


class TestHandle:

    def test_exists(self, make_vault):
        vault = make_vault()
        assert not vault.exists()
        vault.save(sample())
        assert vault.exists()

    def test_load_does_not_modify_file(self, make_vault, vault_path):
        vault = make_vault()
        vault.save({"a": 1})
        before = vault_path.read_bytes()
        mtime = vault_path.stat().st_mtime_ns
        vault.load()
        assert vault_path.read_bytes() == before
        assert vault_path.stat().st_mtime_ns == mtime

    def test_repr_hides_password(self, vault_path):
        vault = VaultFile(vault_path, "hunter2")
        assert "hunter2" not in repr(vault)

    def test_closed_handle(self, make_vault):
        vault = make_vault()
        vault.close()
        with pytest.raises(ValueError):
            vault.save({})
        with pytest.raises(ValueError):
            vault.load()

    def test_context_manager_wipes_password(self, make_vault):
        with make_vault("hunter2") as vault:
            vault.save({"a": 1})
        assert vault._password.wiped

    def test_password_held_in_mutable_buffer(self, vault_path):
        vault = VaultFile(vault_path, "hunter2")
        assert isinstance(vault._password.data, bytearray)
        assert bytes(vault._password.data) == b"hunter2"

    def test_load_with_header_single_read(self, vault_path, monkeypatch):
        VaultFile(vault_path, "pw").with_params(16, 2, 1).save({"a": 1})
        reads = []
        real = vault_module.read_vault

        def spy(path):
            reads.append(path)
            return real(path)

        monkeypatch.setattr(vault_module, "read_vault", spy)
        value, header = VaultFile(vault_path, "pw").load_with_header()
        assert value == {"a": 1}
        assert header.kdf_params == KdfParams(16, 2, 1)
        assert len(reads) == 1

    def test_home_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        vault = VaultFile("~/.my.vault", "pw").with_params(8, 1, 1)
        assert vault.path == tmp_path / ".my.vault"
        vault.save({"a": 1})
        assert (tmp_path / ".my.vault").exists()

    def test_home_unset_stays_literal(self, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        assert VaultFile("~/.my.vault", "pw").path == Path("~/.my.vault")

    def test_open_alias(self, vault_path):
        assert VaultFile.open(vault_path, "pw").path == vault_path


class TestSerializationErrors:

    def test_unserializable_value(self, make_vault, vault_path):
        with pytest.raises(SerializationError):
            make_vault().save({"x": object()})
        assert not vault_path.exists()

    def test_type_mismatch(self, make_vault):
        vault = make_vault()
        vault.save({"name": "x"})
        with pytest.raises(DeserializationError):
            vault.load(TestData)


class TestSecretWiping:

    def test_save_wipes_key(self, make_vault, monkeypatch):
        keys = []
        real = vault_module.derive_key_for

        def spy(*args):
            key = real(*args)
            keys.append(key)
            return key

        monkeypatch.setattr(vault_module, "derive_key_for", spy)
        make_vault().save({"a": 1})
        assert keys and all(k.wiped for k in keys)

    def test_load_wipes_key_and_plaintext(self, make_vault, monkeypatch):
        vault = make_vault()
        vault.save({"a": 1})
        keys, plaintexts = [], []
        real_kdf = vault_module.derive_key_for
        real_decrypt = vault_module.aead_decrypt

        def kdf_spy(*args):
            keys.append(real_kdf(*args))
            return keys[-1]

        def decrypt_spy(*args):
            plaintexts.append(real_decrypt(*args))
            return plaintexts[-1]

        monkeypatch.setattr(vault_module, "derive_key_for", kdf_spy)
        monkeypatch.setattr(vault_module, "aead_decrypt", decrypt_spy)
        assert vault.load() == {"a": 1}
        assert keys[0].wiped
        assert plaintexts[0].wiped

    def test_key_wiped_on_failure(self, make_vault, monkeypatch):
        make_vault("right").save({"a": 1})
        keys = []
        real = vault_module.derive_key_for

        def spy(*args):
            keys.append(real(*args))
            return keys[-1]

        monkeypatch.setattr(vault_module, "derive_key_for", spy)
        with pytest.raises(DecryptionFailed):
            make_vault("wrong").load()
        assert keys[0].wiped

    def test_plaintext_wiped_on_deserialize_failure(self, make_vault, monkeypatch):
        vault = make_vault()
        vault.save({"name": "x"})
        plaintexts = []
        real = vault_module.aead_decrypt

        def spy(*args):
            plaintexts.append(real(*args))
            return plaintexts[-1]

        monkeypatch.setattr(vault_module, "aead_decrypt", spy)
        with pytest.raises(DeserializationError):
            vault.load(TestData)
        assert plaintexts[0].wiped
