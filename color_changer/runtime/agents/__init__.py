"""
Agents used by the Color Changer runtime.

- SessionStateMachine: one operation per (mode, event) pair, mutating the
  Session and building the SkillResponse
- RequestRouter: picks the operation for each inbound request, filters
  stale hardware reports and owns error fallbacks
"""
