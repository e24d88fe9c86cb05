"""Mirror a version-controlled remote file tree into local state.

treesync classifies a repository's files into structured *entries* and
binary *assets*, caches fetched content per path, and uses the remote commit
hash to skip re-listing unchanged trees.

Example:
>>> from treesync.files import classify_files
>>> classify_files([], [], []).count
0

"""

from __future__ import annotations
