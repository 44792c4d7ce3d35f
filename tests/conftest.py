import textwrap
from pathlib import Path

import pytest

SPRING_BOOT = """\
---
title: "Getting Started with Spring Boot"
categories: ["Spring Boot", "Java"]
date: 2021-02-24 00:00:00 +1100
modified: 2021-03-01 00:00:00 +1100
authors: [tom, pratik]
excerpt: "A walk through a first Spring Boot application."
image: images/stock/0001-spring-1200x628.jpg
url: getting-started-with-spring-boot
---

## Setup

Read about [logging](/nodejs-logging/) first, or jump to [the code](#the-code).

{{% image alt="Spring Boot" src="images/posts/spring-boot/arch.png" %}}

{{% info title="Note" %}}
This needs **Java 11**.
{{% /info %}}

## The Code

{{% github "https://github.com/thombergs/code-examples/tree/master/spring-boot" %}}

```java
// {{% notashortcode %}}
@SpringBootApplication
public class App {}
```
"""

NODE_LOGGING = """\
---
title: "Node.js Logging"
categories: Node
date: 2022-01-10
authors: arpendu
description: "Logging in Node.js applications."
url: /nodejs-logging/
---

Logging with winston. See [the missing post](/does-not-exist/) and the [diagram](/images/log.png).
"""

LAUNCHDARKLY_OLD = """\
---
title: "Feature Flags with LaunchDarkly and React"
categories: ["Node", "React"]
date: 2022-03-01
authors: [pratik]
url: nodejs-feature-flag-launchdarkly-react
---

First draft.
"""

LAUNCHDARKLY_NEW = """\
---
title: "Feature Flags with LaunchDarkly and React.js"
categories: ["Node", "React"]
date: 2022-03-01
modified: 2022-03-15
authors: [pratik]
url: nodejs-feature-flag-launchdarkly-react
---

Second draft, with more words.
"""


def write_post(root: Path, name: str, text: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


@pytest.fixture
def corpus_root(tmp_path):
    root = tmp_path / "posts"
    write_post(root, "2021-02-24-spring-boot.md", SPRING_BOOT)
    write_post(root, "2022-01-10-nodejs-logging.md", NODE_LOGGING)
    write_post(root, "drafts-a/launchdarkly-react.md", LAUNCHDARKLY_OLD)
    write_post(root, "drafts-b/launchdarkly-react.md", LAUNCHDARKLY_NEW)
    return root
