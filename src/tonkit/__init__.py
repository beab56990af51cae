"""tonkit: language server provisioning and debug adapter bridging for TON tooling.

Two entry points:

- ``tonkit.provisioning.ToolDispatcher`` resolves a language server for a tool
  identifier and returns the command that launches it.
- ``tonkit.debug.DebugBridge`` turns editor debug requests into TVM debug
  adapter sessions.
"""

__version__ = "0.1.0"
