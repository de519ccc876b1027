# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025-2026 The Forumkit Project Developers

"""Nodes of a form: the common base, children, parents and elements.

Every part of a form, from the document down to a single field, is a
:class:`FormNode`.  Setters return the node so that forms can be built
in a fluent style::

    FormContainer.create("general").label("General").append_children([
        TextFormField.create("title").label("Title").required(),
    ])
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator

from forumkit.misc_utils import escape_html, html_attributes


log = logging.getLogger("form")

valid_id_re = re.compile(r"^[a-z][a-zA-Z0-9_-]*$")
valid_class_re = re.compile(r"^-?[_a-zA-Z]+[_a-zA-Z0-9-]*$")
valid_attribute_re = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")

# these have their own setters
reserved_attributes = ("class", "id", "name", "style")


class FormNode:
    """Common behaviour of all form nodes."""

    template_name = ""

    def __init__(self):
        super().__init__()
        self._id: str | None = None
        self._classes: list[str] = []
        self._attributes: dict[str, str | None] = {}
        self._dependencies: dict[str, Any] = {}
        self._available = True
        self._populated = False

    def __repr__(self):
        return "<{} {}>".format(type(self).__name__, self._id)

    @classmethod
    def create(cls, id: str):
        """Create a new node with the given id."""
        node = cls()
        node.id(id)
        return node

    @staticmethod
    def validate_id(id: str):
        """Raises ValueError if the given string is not a valid node id."""
        if not isinstance(id, str) or not valid_id_re.match(id):
            raise ValueError(f"Invalid id '{id}' given.")

    @staticmethod
    def validate_class(cls: str):
        if not isinstance(cls, str) or not valid_class_re.match(cls):
            raise ValueError(f"Invalid class '{cls}' given.")

    @staticmethod
    def validate_attribute(name: str):
        if not isinstance(name, str) or not valid_attribute_re.match(name):
            raise ValueError(f"Invalid attribute '{name}' given.")
        if name in reserved_attributes:
            raise ValueError(f"Attribute '{name}' is set by a dedicated method.")

    # id

    def id(self, id: str):
        """Set the id of the node.

        Raises:
            RuntimeError: the id has already been set.
            ValueError: invalid id.
        """
        if self._id is not None:
            raise RuntimeError(f"Id has already been set to '{self._id}'.")
        self.validate_id(id)
        self._id = id
        return self

    def get_id(self) -> str:
        if self._id is None:
            raise RuntimeError("Id has not been set.")
        return self._id

    def get_prefixed_id(self) -> str:
        """The id prefixed with the global prefix of the document.

        This is what is used as name when outputting and reading fields.
        """
        return self.get_document().get_prefix() + self.get_id()

    def get_document(self):
        raise RuntimeError(f"{self!r} does not belong to a form document.")

    # css classes

    def add_class(self, cls: str):
        self.validate_class(cls)
        if cls not in self._classes:
            self._classes.append(cls)
        return self

    def add_classes(self, classes):
        for cls in classes:
            self.add_class(cls)
        return self

    def remove_class(self, cls: str):
        """Remove a css class, silently ignoring classes the node does not have."""
        self.validate_class(cls)
        if cls in self._classes:
            self._classes.remove(cls)
        return self

    def has_class(self, cls: str) -> bool:
        self.validate_class(cls)
        return cls in self._classes

    def get_classes(self) -> list[str]:
        return list(self._classes)

    # other attributes

    def attribute(self, name: str, value: str | None = None):
        """Set an additional html attribute, overwriting any earlier value.

        A value of ``None`` gives an attribute without value.
        """
        self.validate_attribute(name)
        if value is not None and not isinstance(value, (str, int, float)):
            raise ValueError(f"Value of attribute '{name}' cannot be {type(value)}.")
        self._attributes[name] = None if value is None else str(value)
        return self

    def get_attribute(self, name: str):
        if not self.has_attribute(name):
            raise ValueError(f"Unknown attribute '{name}' requested.")
        return self._attributes[name]

    def get_attributes(self) -> dict[str, str | None]:
        return dict(self._attributes)

    def has_attribute(self, name: str) -> bool:
        self.validate_attribute(name)
        return name in self._attributes

    # availability and dependencies

    def available(self, available: bool = True):
        """Set whether the node is statically available.

        Unavailable nodes produce no output, their value is not read,
        they are not validated and not saved.  Dependencies, in contrast,
        handle availability that depends on the values of other fields.
        """
        self._available = bool(available)
        return self

    def is_available(self) -> bool:
        return self._available

    def add_dependency(self, dependency):
        """Make this node depend on the value of some field."""
        self._dependencies[dependency.get_id()] = dependency
        dependency.dependent_node(self)
        return self

    def remove_dependency(self, dependency_id: str):
        if not self.has_dependency(dependency_id):
            raise ValueError(f"Unknown dependency with id '{dependency_id}'.")
        del self._dependencies[dependency_id]
        return self

    def has_dependency(self, dependency_id: str) -> bool:
        self.validate_id(dependency_id)
        return dependency_id in self._dependencies

    def get_dependencies(self) -> list:
        return list(self._dependencies.values())

    def check_dependencies(self) -> bool:
        """True if all dependencies are met.

        A dependency on a field that is itself hidden by its dependencies
        is not met.
        """
        for dependency in self._dependencies.values():
            if not dependency.get_field().check_dependencies():
                return False
            if not dependency.check():
                return False
        return True

    # life cycle

    def populate(self):
        """Called once when the document is built.

        Raises:
            RuntimeError: the node has already been populated.
        """
        if self._populated:
            raise RuntimeError(f"{self!r} has already been populated.")
        self._populated = True
        for dependency in self._dependencies.values():
            dependency.populate()
        return self

    def is_populated(self) -> bool:
        return self._populated

    def read_values(self):
        return self

    def validate(self):
        pass

    def run_validators(self):
        pass

    def has_validation_errors(self) -> bool:
        return False

    # output

    def get_html_variables(self) -> dict[str, Any]:
        return {}

    def get_html(self) -> str:
        """The html of this node, empty if the node is unavailable."""
        if not self.is_available():
            return ""
        return self.render()

    def render(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} cannot be rendered")


class FormElement:
    """A node with a label and a description."""

    _label: str | None = None
    _description: str | None = None

    def label(self, label: str | None):
        self._label = label
        return self

    def get_label(self) -> str | None:
        return self._label

    def description(self, description: str | None):
        self._description = description
        return self

    def get_description(self) -> str | None:
        return self._description

    def render_label(self) -> str:
        return escape_html(self._label)


class FormChildNode(FormNode):
    """A node that lives inside a parent node."""

    def __init__(self):
        super().__init__()
        self._parent: FormParentNode | None = None

    def parent(self, parent: FormParentNode):
        if self._parent is not None:
            raise RuntimeError(f"{self!r} already has a parent.")
        self._parent = parent
        return self

    def get_parent(self) -> FormParentNode:
        if self._parent is None:
            raise RuntimeError(f"{self!r} has no parent.")
        return self._parent

    def has_parent(self) -> bool:
        return self._parent is not None

    def get_document(self):
        if self._parent is None:
            raise RuntimeError(f"{self!r} does not belong to a form document.")
        return self._parent.get_document()

    def check_dependencies(self) -> bool:
        if not super().check_dependencies():
            return False
        if self._parent is not None:
            return self._parent.check_dependencies()
        return True


class FormParentNode(FormNode):
    """A node containing child nodes."""

    def __init__(self):
        super().__init__()
        self._children: list[FormChildNode] = []

    def __iter__(self) -> Iterator[FormChildNode]:
        return iter(self._children)

    def __len__(self):
        return len(self._children)

    def children(self) -> list[FormChildNode]:
        return list(self._children)

    def iter_nodes(self) -> Iterator[FormNode]:
        """Iterate over all descendants, depth first."""
        for child in self._children:
            yield child
            if isinstance(child, FormParentNode):
                yield from child.iter_nodes()

    def _check_new_child(self, child):
        if not isinstance(child, FormChildNode):
            raise TypeError(f"Cannot add {type(child).__name__} as a child node.")
        child_id = child.get_id()
        try:
            root = self.get_document()
        except RuntimeError:
            root = self
        if root.get_node_by_id(child_id) is not None or root._id == child_id:
            raise ValueError(f"Node id '{child_id}' is already used.")

    def _adopt(self, child):
        child.parent(self)
        if self._populated:
            child.populate()

    def append_child(self, child: FormChildNode):
        """Append a child node.

        Raises:
            ValueError: another node of the document has the same id.
            RuntimeError: the child already has a parent.
        """
        self._check_new_child(child)
        self._adopt(child)
        self._children.append(child)
        return self

    def append_children(self, children):
        for child in children:
            self.append_child(child)
        return self

    def insert_before(self, child: FormChildNode, reference_node_id: str):
        """Insert a child node before the child with the given id."""
        for i, c in enumerate(self._children):
            if c.get_id() == reference_node_id:
                break
        else:
            raise ValueError(
                f"Unknown child node with id '{reference_node_id}' of {self!r}."
            )
        self._check_new_child(child)
        self._adopt(child)
        self._children.insert(i, child)
        return self

    def has_child(self, node_id: str) -> bool:
        """True if this node has a direct child with the given id."""
        self.validate_id(node_id)
        return any(c.get_id() == node_id for c in self._children)

    def contains_nodes(self) -> bool:
        return len(self._children) > 0

    def get_node_by_id(self, node_id: str) -> FormNode | None:
        """Find a descendant with the given id, or ``None``."""
        for node in self.iter_nodes():
            if node.get_id() == node_id:
                return node
        return None

    def populate(self):
        super().populate()
        for child in self._children:
            child.populate()
        return self

    def read_values(self):
        """Read the values of the available fields from the request data."""
        if self.is_available():
            for child in self._children:
                if child.is_available():
                    child.read_values()
        return self

    def validate(self):
        """Validate each available child whose dependencies are met.

        Field validators only run if the field's own validation found
        no errors, and stop at the first validator that adds one.
        """
        for child in self._children:
            if child.is_available() and child.check_dependencies():
                child.validate()
                child.run_validators()

    def has_validation_errors(self) -> bool:
        for child in self._children:
            if child.is_available() and child.check_dependencies():
                if child.has_validation_errors():
                    return True
        return False

    def render_children(self) -> str:
        return "\n".join(h for h in (c.get_html() for c in self._children) if h)


class FormContainer(FormElement, FormChildNode, FormParentNode):
    """A section grouping other nodes, optionally with a title.

    A container without any available children is itself unavailable.
    """

    template_name = "__formContainer"

    def is_available(self) -> bool:
        if not super().is_available():
            return False
        return any(c.is_available() for c in self._children)

    def render(self) -> str:
        classes = ["section"] + self._classes
        attrs: dict[str, Any] = {
            "id": self.get_prefixed_id() + "Container",
            "class": " ".join(classes),
        }
        attrs.update(self._attributes)
        if not self.check_dependencies():
            attrs["hidden"] = None
        header = ""
        if self._label or self._description:
            header = '<header class="sectionHeader">'
            if self._label:
                header += '<h2 class="sectionTitle">{}</h2>'.format(self.render_label())
            if self._description:
                header += '<p class="sectionDescription">{}</p>'.format(
                    escape_html(self._description)
                )
            header += "</header>\n"
        return "<section{}>\n{}{}\n</section>".format(
            html_attributes(attrs), header, self.render_children()
        )


class FormButton(FormElement, FormChildNode):
    """A button of a form document."""

    template_name = "__formButton"

    def __init__(self):
        super().__init__()
        self._submit = False
        self._access_key: str | None = None

    def submit(self, submit: bool = True):
        self._submit = bool(submit)
        return self

    def is_submit(self) -> bool:
        return self._submit

    def access_key(self, key: str | None):
        if key is not None and len(key) != 1:
            raise ValueError(f"Invalid access key '{key}' given.")
        self._access_key = key
        return self

    def get_access_key(self) -> str | None:
        return self._access_key

    def render(self) -> str:
        attrs: dict[str, Any] = {
            "type": "submit" if self._submit else "button",
            "id": self.get_prefixed_id(),
            "name": self.get_prefixed_id(),
        }
        if self._classes:
            attrs["class"] = " ".join(self._classes)
        if self._access_key:
            attrs["accesskey"] = self._access_key
        attrs.update(self._attributes)
        return "<button{}>{}</button>".format(
            html_attributes(attrs), self.render_label()
        )
