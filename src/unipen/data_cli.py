#!/usr/bin/env python3
"""CLI utility for managing UniPen settings files"""

import argparse
import sys

from .config import get_data_manager


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="unipen-data", description="Manage UniPen parser settings files"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: info
    subparsers.add_parser("info", help="Show settings files locations")

    # Command: reset
    reset_parser = subparsers.add_parser("reset", help="Reset settings files to defaults")
    reset_parser.add_argument("--file", help="Specific file to reset (e.g., parser-settings.yaml)")
    reset_parser.add_argument("--all", action="store_true", help="Reset all files")

    # Command: path
    subparsers.add_parser("path", help="Show user data directory path")

    # Command: copy
    copy_parser = subparsers.add_parser(
        "copy", help="Copy package file to user directory for editing"
    )
    copy_parser.add_argument("file", help="File to copy (e.g., parser-settings.yaml)")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    dm = get_data_manager()

    if args.command == "info":
        info = dm.get_data_info()
        print(f"\n📦 Package data directory:\n   {info['package_data_dir']}")
        print(f"\n📁 User data directory:\n   {info['user_data_dir']}")

        if info["user_files"]:
            print("\n📄 User files (override defaults):")
            for file in info["user_files"]:
                print(f"   • {file}")
        else:
            print("\n📄 User files: None")

        if info["package_files"]:
            print("\n📄 Package files (defaults):")
            for file in info["package_files"]:
                override = " (overridden)" if file in info["user_files"] else ""
                print(f"   • {file}{override}")

        print("\n💡 Tip: User files override package defaults when present")
        print("💡 Use 'unipen-data copy <file>' to copy a default file for editing")

    elif args.command == "reset":
        if args.file:
            removed = dm.reset_to_defaults(args.file)
        elif args.all:
            removed = dm.reset_to_defaults()
        else:
            print("Specify --file <filename> or --all")
            return 1
        print(f"Removed {removed} user file(s)")

    elif args.command == "path":
        print(dm.user_data_dir)

    elif args.command == "copy":
        success = dm.copy_package_to_user(args.file)
        if success:
            print(f"💡 You can now edit: {dm.user_data_dir / args.file}")
        else:
            print(f"❌ Could not copy {args.file}")
        return 0 if success else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
