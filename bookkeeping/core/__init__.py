"""Bookkeeping core: 与框架无关的领域逻辑(异常、查询描述、日志树)."""
