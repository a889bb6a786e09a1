"""
Store an application config encrypted under a password, read it back, and
show what a wrong password looks like.

    python examples/app_config.py
"""
from dataclasses import dataclass, field

from serdevault import DecryptionFailed, KdfParams, VaultModel


@dataclass
class AppConfig(VaultModel):
    VAULT_PATH = "~/.app_config.svlt"
    VAULT_KDF_PARAMS = KdfParams(19456, 2, 1)  # 19 MiB, 2 passes

    api_key: str
    server_url: str
    max_connections: int
    features: list[str] = field(default_factory=list)


def main():
    config = AppConfig(
        api_key="secret_key_12345",
        server_url="https://api.example.com",
        max_connections=100,
        features=["auth", "messaging", "storage"],
    )
    config.save("toto")
    print("[+] Config saved")

    loaded = AppConfig.load("toto")
    print(f"[+] Loaded config: {loaded}")

    try:
        AppConfig.load("ttytyty")
    except DecryptionFailed as e:
        print(f"[!] {e}")


if __name__ == "__main__":
    main()
