"""
Selenium Doc Generator

Parses the Selenium reference page into a typed command catalog and renders
a PHP stub class with phpDoc for every supported command.
- Preprocessor:   whitespace normalization, region carving, XML tree
- Extractor:      <dt>/<dd> entries → Command / Argument
- CatalogBuilder: classification + base-name keyed catalog
- CodeGenerator:  stub class rendering

Public API surface:
  Pipeline classes: Preprocessor, Extractor, CatalogBuilder, CodeGenerator, DocGenerator
  Data models:      Command, Argument, ReturnValue, Category, Subcategory, Catalog
  Error types:      SeleniumDocError and its fatal subclasses
"""

# --- Pipeline stage classes ---
from .preprocessor import Preprocessor, plain_text
from .extractor import Extractor
from .parser import CatalogBuilder, Catalog, build_catalog
from .code_generator import CodeGenerator
from .main import DocGenerator, generate_doc
from .driver_commands import DriverCommands

# --- Naming rules ---
from .classifier import Category, Subcategory, determine_category, determine_subcategory, get_base_name

# --- Data models ---
from .schemas import Command, Argument, ReturnValue

# --- Exceptions ---
from .exceptions import (
    SeleniumDocError,
    ShapeViolation,
    DuplicateKeyError,
    ClassificationGap,
    TemplateError,
    DriverSourceError,
)

__version__ = "0.1.0"
__all__ = [
    "Preprocessor",
    "plain_text",
    "Extractor",
    "CatalogBuilder",
    "Catalog",
    "build_catalog",
    "CodeGenerator",
    "DocGenerator",
    "generate_doc",
    "DriverCommands",
    "Category",
    "Subcategory",
    "determine_category",
    "determine_subcategory",
    "get_base_name",
    "Command",
    "Argument",
    "ReturnValue",
    "SeleniumDocError",
    "ShapeViolation",
    "DuplicateKeyError",
    "ClassificationGap",
    "TemplateError",
    "DriverSourceError",
]
