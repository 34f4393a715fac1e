"""Generate JavaScript bindings for bound backend methods.

Every package of the bindings collection becomes one module, that contains a
dispatcher helper per service and a stub function per method. The stubs forward
their arguments to the runtime call mechanism.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from binding_stub_generator import helper
from binding_stub_generator.js_types import HEADER, MODELS_MODULE, NAMESPACE, RUNTIME_CALL, VOID_TYPE
from binding_stub_generator.writer_dto import BindingsType, BoundMethod, RenderedMethod

logger = logging.getLogger(__name__)

INDENT = "    "


class Writer:
    """A class that renders the binding modules for one bindings collection.

    The display names of all packages are resolved once, when the writer is created.
    A writer must not be shared between generation runs.
    """

    def __init__(self, bindings: BindingsType):
        """Initialize the writer with a bindings collection.

        Args:
            bindings (BindingsType): Package identifier -> service name -> bound methods.
        """
        self._bindings = bindings
        self.package_names: dict[str, str] = helper.normalize_package_names(self._enumerate_package_names())

    def _sorted_packages(self) -> list[str]:
        return sorted(self._bindings)

    def _sorted_services(self, package: str) -> list[str]:
        return sorted(self._bindings[package])

    def _sorted_methods(self, package: str, service: str) -> list[BoundMethod]:
        return sorted(self._bindings[package][service], key=lambda method: method.name)

    def _enumerate_package_names(self) -> list[str]:
        """All package identifiers of this run, in the order their display names are assigned.

        Target packages come first, sorted. Packages that are only known as the origin of
        a model type follow, in the order they are first referenced.
        """
        package_names = self._sorted_packages()

        for package in self._sorted_packages():
            for service in self._sorted_services(package):
                for method in self._sorted_methods(package, service):
                    for parameter in (*method.inputs, *method.outputs):
                        model_package = helper.get_package_name(parameter)
                        if model_package:
                            package_names.append(model_package)

        return helper.unique(package_names)

    def gen_service_helper(self, package_name: str, service_name: str) -> str:
        """Render the dispatcher function that the method stubs of a service call into.

        Args:
            package_name (str): The display name of the package.
            service_name (str): The name of the service.

        Returns:
            str: The helper function source.
        """
        lines = [
            f"function {service_name}(method) {{",
            f"{INDENT}return {{",
            f'{INDENT * 2}packageName: "{package_name}",',
            f'{INDENT * 2}serviceName: "{service_name}",',
            f"{INDENT * 2}methodName: method,",
            f"{INDENT * 2}args: Array.prototype.slice.call(arguments, 1),",
            f"{INDENT}}};",
            "}",
        ]
        return "\n".join(lines) + "\n"

    def _gen_params(self, method: BoundMethod) -> tuple[list[str], list[str]]:
        """Render the `@param` doc lines of a method and collect input models."""
        models: list[str] = []
        lines: list[str] = []

        for parameter in method.inputs:
            model_package = helper.get_package_name(parameter)
            if model_package:
                models.append(model_package)
            lines.append(f" * @param {helper.sanitize_name(parameter.name)} {{{parameter.js_type()}}}")

        if not lines:
            lines.append(" *")

        return lines, models

    def _gen_returns(self, method: BoundMethod) -> tuple[str, list[str]]:
        """Render the `@returns` doc line of a method and collect output models.

        Failure indicators are left out of the annotation. If nothing else is left,
        the method resolves to `void`.
        """
        models: list[str] = []
        js_types: list[str] = []

        for output in method.outputs:
            model_package = helper.get_package_name(output)
            if model_package:
                models.append(model_package)

            if output.type.is_failure:
                continue
            js_types.append(output.js_type())

        if not js_types:
            js_types.append(VOID_TYPE)

        return f" * @returns {{Promise<{', '.join(js_types)}>}}", models

    def gen_method(self, service_name: str, method: BoundMethod) -> RenderedMethod:
        """Render the stub of a single bound method.

        Args:
            service_name (str): The name of the service that owns the method.
            method (BoundMethod): The method to render.

        Returns:
            RenderedMethod: The stub source and the packages of all referenced models.
        """
        param_lines, input_models = self._gen_params(method)
        returns_line, output_models = self._gen_returns(method)

        inputs = ", ".join(helper.sanitize_name(parameter.name) for parameter in method.inputs)
        args = f", {inputs}" if inputs else ""

        lines = [
            "",
            "/**",
            f" * {service_name}.{method.name}",
            f" * {method.doc_comment.strip()}",
            *param_lines,
            returns_line,
            " **/",
            f"function {method.name}({inputs}) {{",
            f'{INDENT}return {RUNTIME_CALL}({service_name}("{method.name}"{args}));',
            "}",
        ]

        return RenderedMethod(text="\n".join(lines) + "\n", models=tuple(helper.unique(input_models + output_models)))

    def gen_namespace(self, package: str) -> str:
        """Render the block that registers all stubs of a package on the global namespace.

        Args:
            package (str): The original identifier of the package.

        Returns:
            str: The registration block.
        """
        package_name = self.package_names[package]

        lines = ["", f"{NAMESPACE} = {NAMESPACE} || {{}};", f"{NAMESPACE}.{package_name} = {{"]
        for service in self._sorted_services(package):
            lines.append(f"{INDENT}{service}: {{")
            for method in self._sorted_methods(package, service):
                lines.append(f"{INDENT * 2}{method.name},")
            lines.append(f"{INDENT}}},")
        lines.append("};")

        return "\n".join(lines) + "\n"

    def gen_imports(self, package: str, models: Sequence[str]) -> str:
        """Render the import statement for all models that a package references.

        Args:
            package (str): The original identifier of the importing package.
            models (Sequence[str]): Original identifiers of the referenced model packages.

        Returns:
            str: The import statement, followed by a blank line, or an empty string if nothing is imported.
        """
        own_name = self.package_names[package]
        model_names = sorted({self.package_names[model] for model in helper.unique(models)} - {own_name})

        if not model_names:
            return ""

        return f"import {{{', '.join(model_names)}}} from '{MODELS_MODULE}';\n\n"

    def gen_module(self, package: str) -> str:
        """Render the complete binding module of one package.

        Args:
            package (str): The original identifier of the package.

        Returns:
            str: The module source, including header and imports.
        """
        package_name = self.package_names[package]
        models: list[str] = []
        body = ""

        for service in self._sorted_services(package):
            body += self.gen_service_helper(package_name, service)
            for method in self._sorted_methods(package, service):
                rendered = self.gen_method(service, method)
                body += rendered.text
                models.extend(rendered.models)

        body += self.gen_namespace(package)

        imports = self.gen_imports(package, models)
        if imports:
            body = imports + body + "\n"

        return HEADER + body

    def dumps(self) -> dict[str, str]:
        """Render the modules of all packages.

        Returns:
            dict[str, str]: Display name of each package -> module source.
        """
        result: dict[str, str] = {}

        for package in self._sorted_packages():
            package_name = self.package_names[package]
            logger.debug("Generating bindings for package '%s' as '%s'.", package, package_name)
            result[package_name] = self.gen_module(package)

        return result


def generate_bindings(bindings: BindingsType) -> dict[str, str]:
    """Entry-point for generating the binding modules of a bindings collection.

    Args:
        bindings (BindingsType): Package identifier -> service name -> bound methods.

    Returns:
        dict[str, str]: Display name of each package -> module source.
    """
    return Writer(bindings).dumps()
