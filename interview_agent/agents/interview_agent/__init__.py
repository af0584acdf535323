from .interview_agent import ask_interview_agent, build_messages

__all__ = ["ask_interview_agent", "build_messages"]
