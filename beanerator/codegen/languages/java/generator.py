"""
Java bean generator implementation.

Generates a ``final class <Record>Bean`` source file per record, in the
same package as the record, interoperable with Java records.
"""

from pathlib import Path
from typing import Any, Dict, List

from ...core.generator import CodeGenerator
from ...core.schema import RecordSchema


class JavaGenerator(CodeGenerator):
    """Code generator for Java bean classes."""

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    def get_template_directory(self) -> Path:
        """Return the Java templates directory."""
        return Path(__file__).parent / "templates"

    def _field_data(self, schema: RecordSchema) -> List[Dict[str, Any]]:
        data = []
        last = len(schema.fields) - 1
        for position, field in enumerate(schema.fields):
            data.append(
                {
                    "name": field.name,
                    "bean_type": field.bean_type,
                    "suffix": "" if position == last else ' + ", "',
                }
            )
        return data

    def _context(self, schema: RecordSchema) -> Dict[str, Any]:
        return {
            "class_name": schema.bean_name,
            "record_name": schema.qualified_name,
            "fields": self._field_data(schema),
        }

    def generate_from_record(self, schema: RecordSchema) -> str:
        values = []
        for field in schema.fields:
            if field.nested:
                values.append(f"{field.bean_type}.fromRecord(record.{field.name}())")
            else:
                values.append(f"record.{field.name}()")
        return self.render_template(
            "from_record.java.j2", {**self._context(schema), "values": values}
        )

    def generate_constructors(self, schema: RecordSchema) -> str:
        args = [f"{field.bean_type} {field.name}" for field in schema.fields]
        return self.render_template(
            "constructors.java.j2", {**self._context(schema), "args": args}
        )

    def generate_accessors(self, schema: RecordSchema) -> str:
        return self.render_template("accessors.java.j2", self._context(schema))

    def generate_equality(self, schema: RecordSchema) -> str:
        properties = [f"this.{field.name}" for field in schema.fields]
        return self.render_template(
            "equality.java.j2", {**self._context(schema), "properties": properties}
        )

    def generate_to_record(self, schema: RecordSchema) -> str:
        values = [
            f"this.get{field.cap_name}()" + (".toRecord()" if field.nested else "")
            for field in schema.fields
        ]
        return self.render_template(
            "to_record.java.j2", {**self._context(schema), "values": values}
        )

    def generate_to_string(self, schema: RecordSchema) -> str:
        return self.render_template("to_string.java.j2", self._context(schema))

    def render(self, schema: RecordSchema, fragments: Dict[str, str]) -> str:
        context = {
            **self._context(schema),
            **fragments,
            "package_name": schema.package_name,
            "visibility": schema.visibility.keyword,
            "annotations": list(schema.annotations),
            "interfaces": list(schema.interfaces),
        }
        return self.render_template("bean_class.java.j2", context)
