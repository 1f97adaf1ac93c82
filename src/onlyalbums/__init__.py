# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Only Albums: a desktop browser for the albums in your streaming library."""

__version__ = "0.1.0"
