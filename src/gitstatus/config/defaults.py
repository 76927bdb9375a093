"""Default configuration values and starter .gitstatus.toml template."""

DEFAULT_TOML = """\
# gitstatus configuration
version = "1.0"

[parse]
grammar = "auto"              # auto | classic | modern | <custom grammar name>
default_grammar = "modern"    # used when auto-detection recognizes nothing
# grammars_dir = ".gitstatus/grammars"   # extra *.yaml grammars

[git]
executable = "git"
timeout = 30

[output]
format = "terminal"           # terminal | json
show_summary = true

[logging]
level = "warning"             # debug | info | warning | error
"""

GRAMMAR_YAML_EXAMPLE = """\
# Example custom grammar; copy into .gitstatus/grammars/ and adapt.
name: example
description: "'#'-prefixed output with tab-indented entries"
comment_prefix: "#"
branch_marker: "On branch "
sections:
  "Changes to be committed": staged
  "Changed but not updated": unstaged
  "Untracked files": untracked
actions:
  staged:
    "new file": new_to_commit
    deleted: deleted_to_commit
    modified: modified_to_commit
  unstaged:
    deleted: deleted_not_updated
    modified: modified_not_updated
advisories:
  - "(use "
error_prefixes:
  - "fatal:"
  - "error:"
"""
