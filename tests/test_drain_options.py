#!/usr/bin/env python3
"""
测试 drain 选项解析

验证 all / none 通配 token 与单个目标 token 的优先级
"""

import pytest

from pupernetes.options import (
    DRAIN_TARGETS,
    DrainDirectives,
    Selection,
    new_drain_options,
    resolve,
    resolve_selection,
    winning_wildcard,
)


ALL_ON = DrainDirectives(
    wildcard_all=True,
    wildcard_none=False,
    enabled=frozenset(DRAIN_TARGETS),
)
ALL_OFF = DrainDirectives(
    wildcard_all=False,
    wildcard_none=True,
    enabled=frozenset(),
)

TEST_CASES = [
    {"name": "all", "input": "all", "expected": ALL_ON},
    {"name": "none", "input": "none", "expected": ALL_OFF},
    {"name": "后出现的 all 胜出", "input": "none,all", "expected": ALL_ON},
    {"name": "后出现的 none 胜出", "input": "all,none", "expected": ALL_OFF},
    {
        "name": "仅 pods",
        "input": "pods",
        "expected": DrainDirectives(enabled=frozenset({"pods"})),
    },
    {"name": "all 忽略 pods", "input": "all,pods", "expected": ALL_ON},
    {"name": "none 忽略 pods", "input": "none,pods", "expected": ALL_OFF},
    {"name": "none 忽略前面的 pods", "input": "pods,none", "expected": ALL_OFF},
    {"name": "重复的 all 不影响结果", "input": "all,all,none", "expected": ALL_OFF},
    {"name": "最后一个 all 胜出", "input": "all,none,all", "expected": ALL_ON},
    {
        "name": "多个目标",
        "input": "pods,iptables",
        "expected": DrainDirectives(enabled=frozenset({"pods", "iptables"})),
    },
    {"name": "空串", "input": "", "expected": DrainDirectives()},
    {"name": "未知 token", "input": "etcd,foo", "expected": DrainDirectives()},
    {
        "name": "未知 token 与已知混合",
        "input": "foo,kubeletgc",
        "expected": DrainDirectives(enabled=frozenset({"kubeletgc"})),
    },
    {"name": "不做空白处理", "input": " pods", "expected": DrainDirectives()},
    {"name": "大小写敏感", "input": "ALL", "expected": DrainDirectives()},
]


@pytest.mark.parametrize("case", TEST_CASES, ids=[c["name"] for c in TEST_CASES])
def test_resolve(case):
    """逐条校验解析结果"""
    actual = resolve(case["input"])
    print(f"  {case['input']!r} → {actual.as_dict()}")
    assert actual == case["expected"]


def test_wildcard_equivalences():
    """通配 token 的等价关系"""
    assert resolve("none,all") == resolve("all")
    assert resolve("all,none") == resolve("none")
    assert resolve("all,pods") == resolve("all")
    assert resolve("none,pods") == resolve("none")


def test_trailing_pods_cannot_reenable_after_none():
    """none 之后的 pods 不会重新开启 pods"""
    directives = resolve("none,pods")

    assert directives.none is True
    assert directives.pods is False


def test_convenience_properties():
    """属性访问"""
    directives = resolve("pods,kubeletgc")

    assert directives.pods is True
    assert directives.kubelet_gc is True
    assert directives.iptables is False
    assert directives.all is False
    assert directives.none is False


def test_as_dict():
    """展开为字典"""
    assert resolve("all").as_dict() == {
        "all": True,
        "none": False,
        "pods": True,
        "kubeletgc": True,
        "iptables": True,
    }
    assert resolve("").as_dict() == {
        "all": False,
        "none": False,
        "pods": False,
        "kubeletgc": False,
        "iptables": False,
    }


def test_directives_are_immutable():
    """解析结果不可变"""
    directives = resolve("pods")

    with pytest.raises(Exception):
        directives.wildcard_all = True


def test_new_drain_options_alias():
    assert new_drain_options("iptables") == resolve("iptables")


def test_winning_wildcard():
    """最后出现位置比较"""
    assert winning_wildcard(["pods"]) is None
    assert winning_wildcard(["all"]) == "all"
    assert winning_wildcard(["none", "pods", "all"]) == "all"
    assert winning_wildcard(["all", "all", "none"]) == "none"


def test_resolve_selection_with_other_targets():
    """通用解析器可用于其它目标集合"""
    targets = ("etcd", "manifests")

    assert resolve_selection("etcd", targets) == Selection(enabled=frozenset({"etcd"}))
    assert resolve_selection("all", targets).enabled == frozenset(targets)
    assert resolve_selection("pods", targets) == Selection()


if __name__ == "__main__":
    import sys
    sys.exit(pytest.main([__file__, "-v", "-s"]))
