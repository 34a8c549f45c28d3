"""이름 절단 엔진과 트리 순회·적용기."""
