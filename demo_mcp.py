import sys
sys.path.insert(0, 'src')
import json
from ticket_adf_mcp.tools.markdown_to_adf import markdown_to_adf
from ticket_adf_mcp.tools.adf_to_markdown import adf_to_markdown

TICKET = {
    'description': """Let users control the lights by voice.

```user-story
As a home owner, I want to switch lights by voice, so that I keep my hands free.
Given the assistant is listening
When I say "lights off"
Then every light in the room turns off
```

See [the design doc](https://example.com/design).""",
    'details': '- **Framework**: React Native with `TypeScript`\n- **Database**: PostgreSQL',
    'acceptance_criteria': '- Wake word is detected\n- Lights respond within 1s',
    'test_strategy': 'Write failing tests for the *intent parser* first.',
}

def demo_forward():
    print('=== Markdown -> ADF ===')
    result = markdown_to_adf(**TICKET)
    print(f"Nodes: {result['node_count']}")
    print(f"Panels: {result['panel_count']}")
    print(json.dumps(result['document']['content'][0], indent=2))
    return result['document']

def demo_reverse(document):
    print('\n=== ADF -> Markdown ===')
    result = adf_to_markdown(document)
    for section, text in result.items():
        print(f'--- {section} ---')
        print(text)

def demo():
    document = demo_forward()
    demo_reverse(document)

demo()
