# make_cert.py
"""
Writes the certificate of completion PDF.

    python make_cert.py --name="Jane Doe"
"""
import argparse
import logging
import sys

from services import config
from services.certificate_generator import CertificateError, generate_certificate

logger = logging.getLogger("make_cert")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a certificate of completion PDF.")
    parser.add_argument(
        "--name",
        "-name",
        default="",
        help="the name of the person who completed the course",
    )
    return parser.parse_args(argv)


def resolve_log_level(name: str) -> int:
    """Numeric level for a name like "DEBUG"; anything unknown falls back to INFO."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=resolve_log_level(config.LOG_LEVEL),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        cert = generate_certificate(args.name)
    except (CertificateError, OSError) as e:
        logger.error("Certificate generation failed: %s", e)
        return 1

    print(f"✅ Certificate generated: {cert['file_path']} ({cert['issue_date']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
