"""
SM_Libs - Stamp Maker Library Modules

This package contains core functionality for turning a photographed
rubber stamp into a .stamp file, organized into specialized sub-packages:

- ImageEditingLib: Pixel buffers, color-to-alpha background removal, PNG codec
- LayoutLib: Reference-line model, edit commands, placement tools
- StampStoreLib: Stamp record assembly, JSON serialization, .stamp files
"""

__version__ = "0.1.0"
