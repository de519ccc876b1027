# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""The Forumkit form builder.

Forms are trees of nodes with a :class:`FormDocument` at the root.
Containers group fields, fields hold values, dependencies hide nodes
depending on the values of fields, and data processors turn the
submitted values into data for database objects.
"""

__copyright__ = "Copyright (C) 2025-2026 The Forumkit Project Developers"
__credits__ = "The Forumkit Project Developers"
__license__ = "AGPL-3.0-or-later"

from .node import FormNode, FormElement, FormChildNode, FormParentNode
from .node import FormContainer, FormButton
from .document import FormDocument
from .data import (
    FormDataHandler,
    FormDataProcessor,
    CustomFormDataProcessor,
    DefaultFormDataProcessor,
    VoidFormDataProcessor,
)
from .dependency import (
    FormFieldDependency,
    EmptyFormFieldDependency,
    NonEmptyFormFieldDependency,
    ValueFormFieldDependency,
)
from .validation import FormFieldValidationError, FormFieldValidator
from .objecttype import ObjectType, ObjectTypeFormNode, object_type_registry
from .html_input import HtmlInputProcessor
from .field import (
    AbstractFormField,
    TextFormField,
    TextareaFormField,
    IntegerFormField,
    BooleanFormField,
    SingleSelectionFormField,
    SimpleAclFormField,
    WysiwygFormField,
)

__all__ = [
    "FormNode",
    "FormElement",
    "FormChildNode",
    "FormParentNode",
    "FormContainer",
    "FormButton",
    "FormDocument",
    "FormDataHandler",
    "FormDataProcessor",
    "CustomFormDataProcessor",
    "DefaultFormDataProcessor",
    "VoidFormDataProcessor",
    "FormFieldDependency",
    "EmptyFormFieldDependency",
    "NonEmptyFormFieldDependency",
    "ValueFormFieldDependency",
    "FormFieldValidationError",
    "FormFieldValidator",
    "ObjectType",
    "ObjectTypeFormNode",
    "object_type_registry",
    "HtmlInputProcessor",
    "AbstractFormField",
    "TextFormField",
    "TextareaFormField",
    "IntegerFormField",
    "BooleanFormField",
    "SingleSelectionFormField",
    "SimpleAclFormField",
    "WysiwygFormField",
]
