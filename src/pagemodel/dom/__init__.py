from pagemodel.dom.builder import ParsedDocument, build_tree

__all__ = ["ParsedDocument", "build_tree"]
