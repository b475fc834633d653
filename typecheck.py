# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import ast
import glob
import logging
import re
import sys
from os.path import exists
import mypy.api as mypy


IGNORE = [
    re.compile(r"Name '.*' already defined \(by an import\)"),
]


def module_from_file(file_name):
    return (
        file_name.replace("src/", "")
        .replace(".pyi", "")
        .replace(".py", "")
        .replace("/", ".")
        .replace(".__init__", "")
    )


def exported_names(file_name):
    """
    Get the names in the ``__all__`` assignment of a module or stub,
    without importing it.
    """
    with open(file_name) as file:
        tree = ast.parse(file.read())
    for node in tree.body:
        if isinstance(node, ast.Assign) and any(
            isinstance(target, ast.Name) and target.id == "__all__"
            for target in node.targets
        ):
            return set(ast.literal_eval(node.value))
    return set()


def declared_names(stub_name):
    """
    Get the names of the classes, functions and variables defined at
    the top level of a stub.
    """
    with open(stub_name) as file:
        tree = ast.parse(file.read())
    names = set()
    for node in tree.body:
        if isinstance(node, (ast.ClassDef, ast.FunctionDef)):
            names.add(node.name)
        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            names.add(node.target.id)
        elif isinstance(node, ast.Assign):
            names.update(
                target.id for target in node.targets if isinstance(target, ast.Name)
            )
    return names


def stub_errors(py_files):
    """
    Find modules without stub and stubs that do not declare all
    exported names of their module.
    """
    errors = {}
    for file in py_files:
        module = module_from_file(file)
        stub = file + "i"
        if not exists(stub):
            # Private helper modules have no public interface
            if exported_names(file):
                errors[module] = [("-", "Stub file is missing")]
            continue
        missing = exported_names(file) - declared_names(stub)
        if missing:
            errors[module] = [
                ("-", f"'{name}' is not declared in the stub")
                for name in sorted(missing)
            ]
    return errors


def mypy_errors(py_files):
    err_dict = {}
    for file in py_files:
        out, _, _ = mypy.run(["--ignore-missing-imports", file])
        for err in out.split("\n"):
            fields = err.split(":", maxsplit=3)
            if len(fields) < 4:
                continue
            file_name, line, err_type, msg = [field.strip() for field in fields]
            if err_type != "error":
                continue
            if any(pattern.match(msg) is not None for pattern in IGNORE):
                continue
            errors = err_dict.setdefault(module_from_file(file_name), [])
            if (line, msg) not in errors:
                errors.append((line, msg))
    return err_dict


def log_errors(title, err_dict):
    logging.info(title)
    for module, errors in err_dict.items():
        for line, msg in errors:
            logging.error(f"{module}:{line}: {msg}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    py_files = sorted(glob.glob("src/seqlab/**/*.py", recursive=True))

    stubs = stub_errors(py_files)
    log_errors("Stubs:", stubs)
    code = mypy_errors(py_files)
    log_errors("Code:", code)
    sys.exit(1 if stubs or code else 0)
