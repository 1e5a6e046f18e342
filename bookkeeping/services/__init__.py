"""Service 层: 业务编排,不返回 Response、不 commit."""
