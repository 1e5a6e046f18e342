"""附件相关 Service."""
