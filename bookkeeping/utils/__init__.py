"""通用工具(日志、时间、响应封装)."""
