"""
v0 Platform MCP server package.

This package exposes MCP tools for the v0 Platform API:
- Chats (create, initialize, fork, messages, versions)
- Projects and their environment variables
- Deployments, logs and errors
- Vercel integration
- Webhooks
- User, billing and rate limits

Every tool is a declarative descriptor (schema + operation + renderer)
served through one generic dispatcher, over stdio or HTTP.
"""
