import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional
from pathlib import Path
import threading

from dotenv import load_dotenv

load_dotenv()


class LLMLogger:
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self.log_file = Path(os.environ.get("LLM_LOG_PATH", "data/Log/llm_log.json"))
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            if not self.log_file.exists():
                self.log_file.write_text("[]", encoding="utf-8")
        except OSError as e:
            print(f"Failed to create LLM log {self.log_file}: {e}")
        self._initialized = True

    def log_llm_call(
        self,
        prompt: str,
        response: Any,
        model: str,
        module: str,
        status: Optional[int] = None,
        metadata: Optional[Dict] = None,
    ):
        """Log one upstream generateContent call"""
        try:
            log_entry = {
                "timestamp": datetime.now().isoformat(),
                "module": module,
                "metadata": metadata or {},
                "request": {"model": model, "prompt": prompt},
                "response": self._extract_response_data(response, status),
            }

            with self._lock:
                logs = self._read_logs()
                logs.append(log_entry)
                self._write_logs(logs)

        except Exception as e:
            print(f"Failed to log LLM call: {e}")

    def _extract_response_data(self, response: Any, status: Optional[int]) -> Dict:
        """Reduce a Gemini response body (or raw error text) to the logged fields"""
        try:
            if isinstance(response, dict):
                usage = response.get("usageMetadata", {})
                candidates = response.get("candidates") or [{}]
                parts = candidates[0].get("content", {}).get("parts") or [{}]
                return {
                    "status": status,
                    "text": parts[0].get("text", ""),
                    "finish_reason": candidates[0].get("finishReason", ""),
                    "model_version": response.get("modelVersion", ""),
                    "usage": {
                        "prompt_tokens": usage.get("promptTokenCount", 0),
                        "completion_tokens": usage.get("candidatesTokenCount", 0),
                        "total_tokens": usage.get("totalTokenCount", 0),
                    },
                }
            else:
                return {
                    "status": status,
                    "text": "" if response is None else str(response),
                    "finish_reason": "",
                    "model_version": "",
                    "usage": {
                        "prompt_tokens": 0,
                        "completion_tokens": 0,
                        "total_tokens": 0,
                    },
                }
        except Exception as e:
            print(f"Failed to extract response data: {e}")
            return {
                "error": str(e),
                "content": str(response),
            }

    def read_logs(self) -> List[Dict]:
        with self._lock:
            return self._read_logs()

    def _read_logs(self) -> List[Dict]:
        """Read existing logs"""
        try:
            with open(self.log_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except Exception:
            return []

    def _write_logs(self, logs: List[Dict]):
        """Write logs to file"""
        try:
            with open(self.log_file, "w", encoding="utf-8") as f:
                json.dump(logs, f, indent=2, ensure_ascii=False)
        except Exception as e:
            print(f"Failed to write logs: {e}")


def get_llm_logger() -> LLMLogger:
    """Get singleton LLMLogger instance"""
    return LLMLogger()
