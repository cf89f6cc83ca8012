"""Code snippet implementation of TextProvider."""

import random
from typing import Dict, Optional

from ..domain.interfaces.text_provider import TextProvider

CODE_SNIPPETS: Dict[str, list[str]] = {
    "javascript": [
        "function calculateSum(a, b) {\n  return a + b;\n}",
        "const array = [1, 2, 3, 4, 5];\nconst doubled = array.map(x => x * 2);",
        "class Person {\n  constructor(name) {\n    this.name = name;\n  }\n}",
        "async function fetchData() {\n  const response = await fetch(url);\n  return response.json();\n}",
        "const isEven = num => num % 2 === 0;",
        "const users = data.filter(user => user.active);\nconst names = users.map(u => u.name);",
        "try {\n  const result = await api.call();\n} catch (error) {\n  console.error(error);\n}",
        "export default function Component() {\n  const [state, setState] = useState(0);\n  return <div>{state}</div>;\n}",
    ],
    "python": [
        "def calculate_sum(a, b):\n    return a + b",
        "numbers = [1, 2, 3, 4, 5]\ndoubled = [x * 2 for x in numbers]",
        "class Person:\n    def __init__(self, name):\n        self.name = name",
        "import requests\nresponse = requests.get(url)\ndata = response.json()",
        "is_even = lambda x: x % 2 == 0",
        'with open("file.txt", "r") as f:\n    content = f.read()',
        "for i in range(10):\n    if i % 2 == 0:\n        print(i)",
        "@decorator\ndef my_function():\n    pass",
    ],
    "java": [
        "public int calculateSum(int a, int b) {\n    return a + b;\n}",
        "List<Integer> numbers = Arrays.asList(1, 2, 3, 4, 5);",
        "public class Person {\n    private String name;\n    public Person(String name) {\n        this.name = name;\n    }\n}",
        "for (int i = 0; i < 10; i++) {\n    System.out.println(i);\n}",
        "try {\n    // code\n} catch (Exception e) {\n    e.printStackTrace();\n}",
    ],
    "typescript": [
        "interface User {\n  name: string;\n  age: number;\n}",
        "const greet = (name: string): string => {\n  return `Hello, ${name}`;\n}",
        'type Status = "active" | "inactive";\nconst status: Status = "active";',
        "function fetchData<T>(url: string): Promise<T> {\n  return fetch(url).then(r => r.json());\n}",
    ],
    "cpp": [
        '#include <iostream>\nusing namespace std;\nint main() {\n  cout << "Hello" << endl;\n  return 0;\n}',
        "vector<int> nums = {1, 2, 3, 4, 5};\nfor (int n : nums) {\n  cout << n << endl;\n}",
        "class Person {\nprivate:\n  string name;\npublic:\n  Person(string n) : name(n) {}\n};",
    ],
    "go": [
        "func calculateSum(a, b int) int {\n  return a + b\n}",
        "for i := 0; i < 10; i++ {\n  fmt.Println(i)\n}",
        "type Person struct {\n  Name string\n  Age  int\n}",
        "if err != nil {\n  return err\n}",
    ],
    "rust": [
        "fn calculate_sum(a: i32, b: i32) -> i32 {\n    a + b\n}",
        "let numbers = vec![1, 2, 3, 4, 5];\nlet doubled: Vec<i32> = numbers.iter().map(|x| x * 2).collect();",
        "struct Person {\n    name: String,\n    age: u32,\n}",
        'match result {\n    Ok(value) => println!("{}", value),\n    Err(e) => eprintln!("Error: {}", e),\n}',
    ],
}


class SnippetTextProvider(TextProvider):
    """TextProvider backed by a fixed pool of code snippets per language.

    Snippets are picked uniformly at random. Pass a seeded ``random.Random``
    for reproducible picks.
    """

    def __init__(
        self,
        snippets: Optional[Dict[str, list[str]]] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the provider.

        Args:
            snippets: Language id to snippet list (defaults to the built-in pool).
            rng: Random source used to pick snippets.
        """
        self._snippets = snippets if snippets is not None else CODE_SNIPPETS
        self._rng = rng or random.Random()

    def get_random_text(self, language_id: str) -> str:
        """Pick a random snippet for a language.

        Raises:
            ValueError: If the language is not found or has no snippets.
        """
        snippets = self._snippets.get(language_id)
        if not snippets:
            raise ValueError(f"Language with id {language_id} not found")

        return self._rng.choice(snippets)

    def list_languages(self) -> list[str]:
        """List languages that have at least one snippet."""
        return [language for language, snippets in self._snippets.items() if snippets]
