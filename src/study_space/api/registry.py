from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

_JSON_TYPES = {str: "string", int: "integer", float: "number", bool: "boolean", dict: "object", list: "array"}


def _describe_annotation(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "string"
    if isinstance(annotation, str):
        base = annotation.replace("Optional[", "").rstrip("]").split("|")[0].strip()
        return {"str": "string", "int": "integer", "float": "number", "bool": "boolean"}.get(base, "string")
    return _JSON_TYPES.get(annotation, "string")


@dataclass(frozen=True)
class ApiFunction:
    name: str
    func: Callable[..., Any]
    description: str
    category: str
    signature: inspect.Signature

    @property
    def parameters(self) -> Dict[str, Dict[str, Any]]:
        described: Dict[str, Dict[str, Any]] = {}
        for param in self.signature.parameters.values():
            entry: Dict[str, Any] = {"type": _describe_annotation(param.annotation)}
            if param.default is inspect.Parameter.empty:
                entry["required"] = True
            elif param.default is not None:
                entry["default"] = param.default
            described[param.name] = entry
        return described

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "parameters": self.parameters,
        }


REGISTRY: Dict[str, ApiFunction] = {}


def register_api(name: str, *, description: str, category: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if name in REGISTRY:
            raise ValueError(f"API function '{name}' is already registered.")
        REGISTRY[name] = ApiFunction(
            name=name,
            func=func,
            description=description,
            category=category,
            signature=inspect.signature(func),
        )
        return func

    return decorator


def get_api_functions() -> List[ApiFunction]:
    return sorted(REGISTRY.values(), key=lambda item: (item.category, item.name))


def call_api(name: str, /, **kwargs: Any) -> Any:
    if name not in REGISTRY:
        raise KeyError(f"API function '{name}' is not registered.")
    return REGISTRY[name].func(**kwargs)
