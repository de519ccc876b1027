# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Form fields: nodes storing a value."""

from .abstract import AbstractFormField
from .length import MinimumLengthFormField, MaximumLengthFormField
from .text import TextFormField, TextareaFormField
from .numeric import IntegerFormField
from .boolean import BooleanFormField
from .selection import SingleSelectionFormField
from .acl import SimpleAclFormField, simple_acl_output_values
from .wysiwyg import WysiwygFormField

__all__ = [
    "AbstractFormField",
    "MinimumLengthFormField",
    "MaximumLengthFormField",
    "TextFormField",
    "TextareaFormField",
    "IntegerFormField",
    "BooleanFormField",
    "SingleSelectionFormField",
    "SimpleAclFormField",
    "simple_acl_output_values",
    "WysiwygFormField",
]
