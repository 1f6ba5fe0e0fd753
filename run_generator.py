#!/usr/bin/env python3
"""
CLI script to generate the Selenium stub class.

Parses the Selenium reference page, matches its commands against the
PHPUnit driver (if given) and writes either the PHP stub class or the parsed
catalog as JSON.

Every option can also be set through the environment (or a .env file):
  SELENIUM_DOC_REFERENCE, SELENIUM_DOC_DRIVER, SELENIUM_DOC_MANUAL, SELENIUM_DOC_OUTPUT,
  SELENIUM_DOC_LOG_LEVEL
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from selenium_doc.main import DocGenerator
from selenium_doc.driver_commands import DriverCommands
from selenium_doc.manual_descriptions import load_manual_descriptions
from selenium_doc.exceptions import SeleniumDocError
from selenium_doc.logger import setup_logger

DEFAULT_OUTPUT = "SeleniumTestCaseDoc.generated.php"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def default_log_level() -> str:
    """SELENIUM_DOC_LOG_LEVEL if it names one of LOG_LEVELS, else INFO."""
    level = os.getenv("SELENIUM_DOC_LOG_LEVEL", "INFO").upper()
    return level if level in LOG_LEVELS else "INFO"


def main():
    parser = argparse.ArgumentParser(description="Generate phpDoc stubs from the Selenium reference page")
    parser.add_argument("--reference", "-r", default=os.getenv("SELENIUM_DOC_REFERENCE"),
                        help="Selenium reference HTML page")
    parser.add_argument("--driver", "-d", default=os.getenv("SELENIUM_DOC_DRIVER"),
                        help="PHPUnit_Extensions_SeleniumTestCase_Driver source (Driver.php)")
    parser.add_argument("--manual", "-m", default=os.getenv("SELENIUM_DOC_MANUAL"),
                        help="Manual descriptions JSON (default: packaged file)")
    parser.add_argument("--output", "-o", default=os.getenv("SELENIUM_DOC_OUTPUT", DEFAULT_OUTPUT),
                        help="Output file")
    parser.add_argument("--format", "-f", choices=["php", "json"], default="php",
                        help="php: stub class, json: parsed catalog")
    parser.add_argument("--log-level", default=default_log_level(), choices=LOG_LEVELS)
    parser.add_argument("--log-file", help="Also write the log to this file")
    args = parser.parse_args()

    if not args.reference:
        parser.error("--reference (or SELENIUM_DOC_REFERENCE) is required")

    logger = setup_logger(level=getattr(logging, args.log_level), log_file=args.log_file)

    try:
        generator = DocGenerator(manual_descriptions=load_manual_descriptions(args.manual))
        catalog = generator.parse_file(args.reference)

        if args.format == "json":
            # ensure_ascii=False keeps non-ASCII description text readable
            output = json.dumps(catalog.to_dict(), indent=2, ensure_ascii=False)
        else:
            if args.driver:
                driver_commands = DriverCommands.from_file(args.driver)
                reconciliation = generator.reconcile(catalog, driver_commands)
                commands = reconciliation.commands
                if reconciliation.not_found:
                    print("Not found description for commands:")
                    print(json.dumps(reconciliation.not_found, indent=2))
            else:
                commands = generator.catalog_commands(catalog)
            output = generator.code_generator.generate(commands)

    except SeleniumDocError as e:
        logger.error(str(e))
        print(f"✗ {e}")
        sys.exit(1)

    Path(args.output).write_text(output, encoding="utf-8")
    print(f"✓ Saved to: {args.output}")


if __name__ == "__main__":
    main()
