"""
Heuristic comment stripping.

Dispatch is purely on file extension. The patterns are line-oriented
regular expressions, not parsers: comment markers inside string literals
are removed too. A ``//`` directly preceded by ``:`` is kept so URLs such
as ``http://`` survive, which also means ``x://comment`` is left alone.
"""

import re

from .file_filter import get_extension

C_STYLE_EXTENSIONS = frozenset({
    '.js', '.jsx', '.ts', '.tsx', '.java', '.cs', '.cpp', '.c', '.h', '.go',
    '.rs', '.dart', '.kt', '.scala', '.swift', '.php', '.css', '.scss', '.less',
})

HASH_STYLE_EXTENSIONS = frozenset({
    '.py', '.rb', '.pl', '.sh', '.yaml', '.yml', '.toml', '.dockerfile',
})

MARKUP_EXTENSIONS = frozenset({'.html', '.xml', '.svg'})

_C_STYLE_PATTERN = re.compile(r'/\*[\s\S]*?\*/|([^:]|^)//.*$', re.MULTILINE)
_HASH_STYLE_PATTERN = re.compile(r'(?<!\\)#.*$', re.MULTILINE)
_MARKUP_PATTERN = re.compile(r'<!--[\s\S]*?-->')


def strip_comments(content: str, path: str) -> str:
    """
    Strip comments from content based on the path's extension.
    
    Args:
        content: File text.
        path: Repository path used only for its extension.
        
    Returns:
        Content with comments removed and surrounding whitespace trimmed,
        or the unchanged content for unrecognised extensions.
    """
    ext = get_extension(path)
    
    if ext in C_STYLE_EXTENSIONS:
        return _C_STYLE_PATTERN.sub(r'\1', content).strip()
    
    if ext in HASH_STYLE_EXTENSIONS:
        return _HASH_STYLE_PATTERN.sub('', content).strip()
    
    if ext in MARKUP_EXTENSIONS:
        return _MARKUP_PATTERN.sub('', content).strip()
    
    return content
