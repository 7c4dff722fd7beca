"""
phantom_pdf - HTML to PDF export through a headless PhantomJS-style renderer

Turns an already-rendered document (body HTML plus optional header/footer
fragments) into a PDF by generating a page-layout script and running the
external renderer against it.

Architecture:
- Templating Context: inline header/footer templating and layout script generation
- Rendering Context: renderer options, command lines, process execution and export orchestration
"""

__version__ = "0.1.0"
