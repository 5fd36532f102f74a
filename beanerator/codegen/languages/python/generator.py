"""
Python bean generator implementation.

Generates one Python module per record holding a mutable bean class with
``fromRecord``/``toRecord`` conversions, fluent accessors, ``equals``,
``hashCode`` and ``toString`` (aliased to the matching dunder methods).
"""

import ast
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from ...core.generator import FRAGMENTS, CodeGenerator, RenderError
from ...core.naming import bean_class_name, bean_module_name, snake_case
from ...core.schema import FieldSchema, RecordSchema, Visibility
from ...core.types import Import


class PythonGenerator(CodeGenerator):
    """Code generator for Python bean classes."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def file_name(self, class_name: str) -> str:
        """Beans are written to snake_case modules, ``coffee_bean.py``."""
        return f"{snake_case(class_name)}{self.file_extension}"

    def get_template_directory(self) -> Path:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def module_name(self, schema: RecordSchema) -> str:
        """Dotted module name the bean for ``schema`` lives in."""
        return bean_module_name(schema.package_name, schema.bean_name)

    # Naming helpers

    def _record_ref(self, schema: RecordSchema) -> Tuple[str, Optional[Import]]:
        """Spelling of the record inside the bean module and its import."""
        module = schema.module_name
        prefix = f"{module}."
        if module and schema.qualified_name.startswith(prefix):
            spelled = schema.qualified_name[len(prefix):]
        else:
            spelled = schema.simple_name
        if not module:
            return spelled, None
        return spelled, (module, spelled.split(".", 1)[0])

    def _storage_type(self, field: FieldSchema) -> str:
        if field.nested:
            return bean_class_name(field.type.simple_name)
        return field.type.name

    def _annotation(self, field: FieldSchema) -> str:
        storage = self._storage_type(field)
        if storage == "None" or storage.endswith("| None"):
            return storage
        return f"{storage} | None"

    def _field_data(self, schema: RecordSchema) -> List[Dict[str, Any]]:
        data = []
        last = len(schema.fields) - 1
        for position, field in enumerate(schema.fields):
            data.append(
                {
                    "name": field.name,
                    "nested": field.nested,
                    "annotation": self._annotation(field),
                    "separator": "" if position == last else ", ",
                }
            )
        return data

    def _imports(self, schema: RecordSchema) -> List[str]:
        """Import lines needed by the bean module."""
        own_module = self.module_name(schema)
        from_imports: Set[Import] = set()
        plain_imports: Set[str] = set()

        _, record_import = self._record_ref(schema)
        if record_import:
            from_imports.add(record_import)

        for field in schema.fields:
            if field.nested:
                bean = bean_class_name(field.type.simple_name)
                from_imports.add((bean_module_name(field.type.package, bean), bean))
            else:
                from_imports.update(field.type.imports)

        # Dotted decorators and base classes need their module imported
        for reference in (*schema.annotations, *schema.interfaces):
            module = reference.split("(", 1)[0].rpartition(".")[0]
            if module:
                plain_imports.add(module)

        grouped: Dict[str, Set[str]] = {}
        for module, symbol in from_imports:
            if module in ("builtins", own_module):
                continue
            grouped.setdefault(module, set()).add(symbol)

        lines = [f"import {module}" for module in sorted(plain_imports)]
        lines.extend(
            f"from {module} import {', '.join(sorted(symbols))}"
            for module, symbols in sorted(grouped.items())
        )
        return lines

    def _context(self, schema: RecordSchema) -> Dict[str, Any]:
        record_name, _ = self._record_ref(schema)
        return {
            "class_name": schema.bean_name,
            "record_name": record_name,
            "qualified_name": schema.qualified_name,
            "fields": self._field_data(schema),
        }

    def _check_names(self, schema: RecordSchema):
        super()._check_names(schema)
        # Description types are spelled by hand and land verbatim in annotations
        for field in schema.fields:
            if field.nested:
                continue
            try:
                ast.parse(field.type.name, mode="eval")
            except SyntaxError as e:
                raise RenderError(
                    f"Type '{field.type.name}' of {schema.simple_name}.{field.name} "
                    f"is not a Python expression: {e.msg}"
                ) from e

    # Fragment generators

    def generate_from_record(self, schema: RecordSchema) -> str:
        values = []
        for field in schema.fields:
            if field.nested:
                values.append(
                    f"{bean_class_name(field.type.simple_name)}.fromRecord(record.{field.name})"
                )
            else:
                values.append(f"record.{field.name}")
        return self.render_template(
            "from_record.py.j2", {**self._context(schema), "values": values}
        )

    def generate_constructors(self, schema: RecordSchema) -> str:
        return self.render_template("constructors.py.j2", self._context(schema))

    def generate_accessors(self, schema: RecordSchema) -> str:
        return self.render_template("accessors.py.j2", self._context(schema))

    def generate_equality(self, schema: RecordSchema) -> str:
        members = [f"self._{field.name}" for field in schema.fields]
        if len(members) == 1:
            hash_args = f"({members[0]},)"
        else:
            hash_args = f"({', '.join(members)})"
        return self.render_template(
            "equality.py.j2", {**self._context(schema), "hash_args": hash_args}
        )

    def generate_to_record(self, schema: RecordSchema) -> str:
        return self.render_template("to_record.py.j2", self._context(schema))

    def generate_to_string(self, schema: RecordSchema) -> str:
        return self.render_template("to_string.py.j2", self._context(schema))

    # Renderer

    def render(self, schema: RecordSchema, fragments: Dict[str, str]) -> str:
        context = {
            **self._context(schema),
            "imports": self._imports(schema),
            "public": schema.visibility is Visibility.PUBLIC,
            "decorators": list(schema.annotations),
            "bases": list(schema.interfaces),
            "fragments": [fragments[name] for name in FRAGMENTS],
        }
        return self.render_template("bean_module.py.j2", context)

    def validate_schema(self, schema: RecordSchema) -> List[str]:
        """Validate schemas for Python generation."""
        warnings = super().validate_schema(schema)
        for reference in (*schema.annotations, *schema.interfaces):
            if "." not in reference:
                warnings.append(
                    f"'{reference}' on {schema.simple_name} is not dotted and "
                    "must be a builtin to resolve in the bean module"
                )
        return warnings
