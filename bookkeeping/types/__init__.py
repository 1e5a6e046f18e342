"""通用类型定义(跨层共享的结构与别名)."""
