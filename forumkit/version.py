# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The Forumkit Project Developers

__version__ = "0.3.0.dev0"
