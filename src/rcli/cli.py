"""
rcli CLI

Commands:
  text sign      - Sign a message with a blake3 session key or ed25519 private key
  text verify    - Verify a message signature
  text encrypt   - Encrypt a message with chacha20poly1305
  text decrypt   - Decrypt a message with chacha20poly1305
  text generate  - Generate a blake3 key or ed25519 key pair

Signatures and ciphertexts are printed as URL-safe base64 without padding.
Encryption keys are given as 64 hex characters.
"""

import argparse
import binascii
import io
import sys

from .config import TextConfig, configure_logging
from .crypto import (
    KeyMaterial,
    SignMethod,
    TextCryptoError,
    process_text_decrypt,
    process_text_encrypt,
    process_text_key_generate,
    process_text_sign,
    process_text_verify,
)
from .utils import b64_decode, b64_encode, open_reader, read_content, write_artifacts


def _fail(message):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def cmd_sign(args, config):
    """Sign a message and print the signature."""
    key = read_content(args.key)
    with open_reader(args.input) as reader:
        signature = process_text_sign(reader, key, args.method, config)
    print(b64_encode(signature))


def cmd_verify(args, config):
    """Verify a message against a detached signature."""
    key = read_content(args.key)
    try:
        signature = b64_decode(args.sig)
    except (binascii.Error, ValueError) as e:
        _fail(f"Signature is not valid base64: {e}")

    with open_reader(args.input) as reader:
        verified = process_text_verify(reader, key, signature, args.method, config)

    if verified:
        print("✓ Signature verified")
    else:
        print("⚠ Signature not verified")


def cmd_encrypt(args, config):
    """Encrypt a message and print the envelope."""
    key = KeyMaterial.from_hex(args.key)
    with open_reader(args.input) as reader:
        encrypted = process_text_encrypt(reader, key)
    print(b64_encode(encrypted), end="")


def cmd_decrypt(args, config):
    """Decrypt a base64 envelope and print the plaintext."""
    key = KeyMaterial.from_hex(args.key)
    try:
        envelope = b64_decode(read_content(args.input))
    except (binascii.Error, ValueError) as e:
        _fail(f"Input is not valid base64: {e}")

    plaintext = process_text_decrypt(io.BytesIO(envelope), key)
    try:
        print(plaintext.decode("utf-8"))
    except UnicodeDecodeError:
        _fail("Decrypted message is not valid UTF-8")


def cmd_generate(args, config):
    """Generate key files for a signing method."""
    output = args.output or config.key_dir
    artifacts = process_text_key_generate(args.method)
    for path in write_artifacts(artifacts, output):
        print(f"Wrote {path}")


def _method(value):
    try:
        return SignMethod.parse(value)
    except TextCryptoError:
        choices = ", ".join(m.value for m in SignMethod)
        raise argparse.ArgumentTypeError(f"invalid method {value!r} (choose from {choices})")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rcli",
        description="rcli - Text signing and encryption",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    text_parser = subparsers.add_parser("text", help="Text sign/verify/encrypt/decrypt")
    text_commands = text_parser.add_subparsers(dest="text_command", help="Text commands")

    # sign
    sign_parser = text_commands.add_parser("sign", help="Sign a message")
    sign_parser.add_argument("-i", "--input", default="-", help="Message file, - for stdin")
    sign_parser.add_argument("-k", "--key", required=True, help="Key file")
    sign_parser.add_argument("-m", "--method", type=_method, default=SignMethod.BLAKE3)

    # verify
    verify_parser = text_commands.add_parser("verify", help="Verify a signature")
    verify_parser.add_argument("-i", "--input", default="-", help="Message file, - for stdin")
    verify_parser.add_argument("-k", "--key", required=True, help="Key file")
    verify_parser.add_argument("-s", "--sig", required=True, help="Signature (base64)")
    verify_parser.add_argument("-m", "--method", type=_method, default=SignMethod.BLAKE3)

    # encrypt
    encrypt_parser = text_commands.add_parser("encrypt", help="Encrypt with chacha20poly1305")
    encrypt_parser.add_argument("-i", "--input", default="-", help="Message file, - for stdin")
    encrypt_parser.add_argument("-k", "--key", required=True, help="Key as 64 hex characters")

    # decrypt
    decrypt_parser = text_commands.add_parser("decrypt", help="Decrypt with chacha20poly1305")
    decrypt_parser.add_argument("-i", "--input", default="-", help="Base64 file, - for stdin")
    decrypt_parser.add_argument("-k", "--key", required=True, help="Key as 64 hex characters")

    # generate
    generate_parser = text_commands.add_parser("generate", help="Generate key files")
    generate_parser.add_argument("-m", "--method", type=_method, default=SignMethod.BLAKE3)
    generate_parser.add_argument("-o", "--output", help="Output directory (default: RCLI_KEY_DIR or .)")

    return parser, text_parser


def main(argv=None):
    parser, text_parser = build_parser()
    args = parser.parse_args(argv)
    config = TextConfig.from_env()
    configure_logging(config.log_level)

    commands = {
        "sign": cmd_sign,
        "verify": cmd_verify,
        "encrypt": cmd_encrypt,
        "decrypt": cmd_decrypt,
        "generate": cmd_generate,
    }

    if args.command != "text":
        parser.print_help()
        return
    command = commands.get(args.text_command)
    if command is None:
        text_parser.print_help()
        return

    try:
        command(args, config)
    except (TextCryptoError, OSError) as e:
        _fail(e)


if __name__ == "__main__":
    main()
