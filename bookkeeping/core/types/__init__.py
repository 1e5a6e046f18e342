"""核心层类型定义(查询描述符、筛选条件、日志树节点)."""
