# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Main entry point for the Only Albums application."""

import sys

from onlyalbums.ui.main_window import main

if __name__ == "__main__":
    sys.exit(main())
