# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

import sys

from baselog.cli import main

sys.exit(main())
