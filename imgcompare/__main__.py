"""
Allow running the package with: python -m imgcompare

Examples:
    python -m imgcompare /path/to/photos -s a.png   # Compare a.png against a directory
    python -m imgcompare /path/to/photos            # Prompt for source images
    python -m imgcompare config                     # Show configuration
    python -m imgcompare config --init              # Create example config file
"""

import sys


def show_config(argv) -> int:
    from .user_config import get_user_config

    config = get_user_config()

    if '--init' in argv or '-i' in argv:
        if config.create_example_config():
            print("✓ Created example configuration file at:")
            print(f"  {config.config_file_path}")
            print("\nEdit this file to customize Image Comparator settings.")
            return 0
        print("✗ Failed to create configuration file.")
        return 1

    print(f"Configuration file: {config.config_file_path}")
    if config.config_file_path.exists():
        print("Status: ✓ Found")
    else:
        print("Status: ✗ Not found (using defaults)")
        print("\nRun 'python -m imgcompare config --init' to create one.")

    print("\nCurrent settings:")
    for key, value in config.as_dict().items():
        print(f"  {key}: {value}  ({config.source_of(key)})")
    return 0


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        sys.exit(show_config(sys.argv[2:]))

    from .cli import main as cli_main
    sys.exit(cli_main())


if __name__ == '__main__':
    main()
